"""Record types produced by the converters.

Everything here is immutable: the reconcilers build each record once all of
its inputs are known and never touch it again. Editing happens downstream.
"""
from __future__ import annotations
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple, Union


DEFAULT_OPTION_NAME = "Title"
DEFAULT_OPTION_VALUE = "Default Title"


@dataclass(frozen=True)
class CustomerRecord:
    id: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    company: str = ""
    address1: str = ""
    address2: str = ""
    city: str = ""
    province: str = ""
    province_code: str = ""
    country: str = ""
    country_code: str = ""
    zip: str = ""
    phone: str = ""
    accepts_marketing: bool = False
    accepts_sms_marketing: bool = False
    tags: str = ""
    note: str = ""
    tax_exempt: bool = False

    def has_identity(self) -> bool:
        return any((self.email, self.first_name, self.last_name, self.company, self.address1, self.phone))


@dataclass(frozen=True)
class ProductDetails:
    """Product-level columns, stated once per handle."""

    title: str = ""
    body_html: str = ""
    vendor: str = ""
    product_type: str = ""
    tags: str = ""
    seo_title: str = ""
    seo_description: str = ""


@dataclass(frozen=True)
class Variant:
    sku: str
    price: float = 0.0
    inventory_qty: int = 0
    weight: float = 0.0
    weight_unit: str = "g"
    option1_name: str = DEFAULT_OPTION_NAME
    option1_value: str = DEFAULT_OPTION_VALUE
    image_src: str = ""
    image_position: int = 1
    published: bool = True
    taxable: bool = True
    requires_shipping: bool = True


@dataclass(frozen=True)
class ParentVariantRow:
    """First row of a handle: carries the product details and the first variant."""

    handle: str
    product: ProductDetails
    variant: Variant
    source_type: str = "simple"

    is_variant_row = False


@dataclass(frozen=True)
class ContinuationVariantRow:
    """Any later row of a handle: variant columns only."""

    handle: str
    variant: Variant

    is_variant_row = True


ShopifyProductRow = Union[ParentVariantRow, ContinuationVariantRow]


@dataclass(frozen=True)
class ConversionStats:
    lines_processed: int = 0
    skipped_no_sku: int = 0
    skipped_column_mismatch: int = 0
    simple_count: int = 0
    configurable_count: int = 0
    other_types_skipped: int = 0
    variants_processed: int = 0
    variant_sku_not_found: int = 0
    configurables_without_variants: int = 0
    standalone_count: int = 0
    rows_emitted: int = 0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class CustomerStats:
    lines_processed: int = 0
    skipped_empty: int = 0
    skipped_column_mismatch: int = 0
    dropped_no_identity: int = 0
    customers_found: int = 0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


class ResultType(str, Enum):
    customers_found = "customers_found"
    no_customers_extracted = "no_customers_extracted"
    products_found = "products_found"
    no_products_extracted = "no_products_extracted"
    parse_error = "parse_error"


@dataclass(frozen=True)
class ParseCustomerResult:
    type: ResultType
    message: str
    data: Tuple[CustomerRecord, ...] = field(default_factory=tuple)
    stats: Optional[CustomerStats] = None

    @property
    def ok(self) -> bool:
        return self.type == ResultType.customers_found


@dataclass(frozen=True)
class ParseProductResult:
    type: ResultType
    message: str
    data: Tuple[ShopifyProductRow, ...] = field(default_factory=tuple)
    stats: Optional[ConversionStats] = None

    @property
    def ok(self) -> bool:
        return self.type == ResultType.products_found
