"""Magento product export → Shopify product import.

Magento lists every sellable item as its own ``simple`` row and groups them
under ``configurable`` rows that reference the simples by SKU. Shopify wants
one handle per product with one row per variant, the product-level columns
filled on the first row only. Conversion runs in three passes:

1. classify rows into a SKU → simple map and a list of configurables;
2. expand each configurable into a parent row plus continuation rows, taking
   (and removing) its referenced simples from the map;
3. emit every simple nobody referenced as a single-variant product.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .headers import HeaderIndex, clean_headers, resolve_headers
from .images import build_full_image_url
from .io import detect_delimiter, parse_csv_line, read_text, rows_to_csv, split_lines, write_text
from .mapping import (
    CONFIGURABLE,
    PRODUCT_ALIASES,
    SIMPLE,
    ProductField as P,
    infer_published,
    infer_taxable,
    infer_vendor,
)
from .models import (
    DEFAULT_OPTION_NAME,
    DEFAULT_OPTION_VALUE,
    ContinuationVariantRow,
    ConversionStats,
    ParentVariantRow,
    ParseProductResult,
    ProductDetails,
    ResultType,
    ShopifyProductRow,
    Variant,
)
from .normalize import extract_tags_from_categories, format_number, parse_decimal, parse_int


log = logging.getLogger(__name__)

PLACEHOLDER_OPTION_NAME = "Option"

GOOGLE_SHOPPING_HEADERS = [
    "Google Shopping / Google Product Category",
    "Google Shopping / Gender",
    "Google Shopping / Age Group",
    "Google Shopping / MPN",
    "Google Shopping / AdWords Grouping",
    "Google Shopping / AdWords Labels",
    "Google Shopping / Condition",
    "Google Shopping / Custom Product",
    "Google Shopping / Custom Label 0",
    "Google Shopping / Custom Label 1",
    "Google Shopping / Custom Label 2",
    "Google Shopping / Custom Label 3",
    "Google Shopping / Custom Label 4",
]

PRODUCT_HEADERS = [
    "Handle",
    "Title",
    "Body (HTML)",
    "Vendor",
    "Product Category",
    "Type",
    "Tags",
    "Published",
    "Option1 Name",
    "Option1 Value",
    "Option2 Name",
    "Option2 Value",
    "Option3 Name",
    "Option3 Value",
    "Variant SKU",
    "Variant Grams",
    "Variant Inventory Tracker",
    "Variant Inventory Qty",
    "Variant Inventory Policy",
    "Variant Fulfillment Service",
    "Variant Price",
    "Variant Compare At Price",
    "Variant Requires Shipping",
    "Variant Taxable",
    "Variant Barcode",
    "Image Src",
    "Image Position",
    "Image Alt Text",
    "Gift Card",
    "SEO Title",
    "SEO Description",
    *GOOGLE_SHOPPING_HEADERS,
    "Variant Image",
    "Variant Weight Unit",
    "Variant Tax Code",
    "Cost per item",
    "Price / International",
    "Compare At Price / International",
    "Status",
]


@dataclass(frozen=True)
class VariationRef:
    """One entry of a configurable's variation list."""

    sku: str
    attributes: Dict[str, str]

    def option_value(self, option_name: str) -> str:
        want = option_name.lower()
        for key, val in self.attributes.items():
            if key.lower() == want:
                return val
        return ""


def option_name_from_labels(labels: str) -> str:
    """'color=Colour,size=Size' → 'color'; the first attribute code names Option1."""
    name = labels.split("=", 1)[0].strip() if labels else ""
    return name or PLACEHOLDER_OPTION_NAME


def parse_variations(value: str) -> List[VariationRef]:
    """Parse 'sku=A,color=Red|sku=B,color=Blue' into variation references."""
    refs: List[VariationRef] = []
    if not value:
        return refs
    for entry in value.split("|"):
        attrs: Dict[str, str] = {}
        sku = ""
        for pair in entry.split(","):
            if "=" not in pair:
                continue
            key, val = pair.split("=", 1)
            key, val = key.strip(), val.strip()
            if key.lower() == "sku":
                sku = val
            else:
                attrs[key] = val
        if sku or attrs:
            refs.append(VariationRef(sku=sku, attributes=attrs))
    return refs


def product_details(index: HeaderIndex[P], values: Sequence[str]) -> ProductDetails:
    attribute_set = index.value(values, P.attribute_set)
    return ProductDetails(
        title=index.value(values, P.name) or index.value(values, P.sku),
        body_html=index.value(values, P.description) or index.value(values, P.short_description),
        vendor=infer_vendor(index.value(values, P.vendor), attribute_set),
        product_type=attribute_set,
        tags=extract_tags_from_categories(index.value(values, P.categories)),
        seo_title=index.value(values, P.meta_title),
        seo_description=index.value(values, P.meta_description),
    )


def build_variant(
    index: HeaderIndex[P],
    values: Sequence[str],
    base_image_url: Optional[str],
    option_name: str = DEFAULT_OPTION_NAME,
    option_value: str = DEFAULT_OPTION_VALUE,
    image_position: int = 1,
) -> Variant:
    image = build_full_image_url(index.value(values, P.image), base_image_url)
    return Variant(
        sku=index.value(values, P.sku),
        price=parse_decimal(index.value(values, P.price)),
        inventory_qty=parse_int(index.value(values, P.qty)),
        weight=parse_decimal(index.value(values, P.weight)),
        option1_name=option_name,
        option1_value=option_value,
        image_src=image,
        image_position=image_position,
        published=infer_published(index.optional(values, P.visibility), index.optional(values, P.product_online)),
        taxable=infer_taxable(index.optional(values, P.tax_class)),
    )


class _Counters:
    """Mutable tallies for one run; frozen into ConversionStats at the end."""

    def __init__(self) -> None:
        self.lines_processed = 0
        self.skipped_no_sku = 0
        self.skipped_column_mismatch = 0
        self.simple_count = 0
        self.configurable_count = 0
        self.other_types_skipped = 0
        self.variants_processed = 0
        self.variant_sku_not_found = 0
        self.configurables_without_variants = 0
        self.standalone_count = 0

    def freeze(self, rows_emitted: int) -> ConversionStats:
        return ConversionStats(rows_emitted=rows_emitted, **vars(self))


def classify_rows(
    index: HeaderIndex[P],
    data_lines: Iterable[str],
    delimiter: str,
    counters: _Counters,
) -> Tuple[Dict[str, List[str]], List[List[str]]]:
    simples: Dict[str, List[str]] = {}
    configurables: List[List[str]] = []
    for lineno, line in enumerate(data_lines, start=2):
        if not line.strip():
            continue
        counters.lines_processed += 1
        values = parse_csv_line(line, delimiter)
        sku = index.value(values, P.sku)
        if not sku:
            counters.skipped_no_sku += 1
            log.debug("Line %d: no SKU; skipped", lineno)
            continue
        if len(values) != index.width:
            counters.skipped_column_mismatch += 1
            log.debug("Line %d (%s): expected %d columns, got %d; skipped", lineno, sku, index.width, len(values))
            continue
        product_type = (index.value(values, P.product_type) if index.has(P.product_type) else SIMPLE).strip().lower()
        if product_type in (SIMPLE, ""):
            if sku in simples:
                log.debug("Line %d: duplicate simple SKU %s replaces the earlier row", lineno, sku)
            simples[sku] = values
            counters.simple_count += 1
        elif product_type == CONFIGURABLE:
            configurables.append(values)
            counters.configurable_count += 1
        else:
            counters.other_types_skipped += 1
            log.debug("Line %d (%s): product type %r not supported; skipped", lineno, sku, product_type)
    return simples, configurables


def expand_configurable(
    index: HeaderIndex[P],
    values: Sequence[str],
    simples: Dict[str, List[str]],
    base_image_url: Optional[str],
    counters: _Counters,
) -> List[ShopifyProductRow]:
    handle = index.value(values, P.sku)
    option_name = option_name_from_labels(index.value(values, P.configurable_variation_labels))
    details = product_details(index, values)

    resolved: List[Tuple[List[str], str]] = []
    for ref in parse_variations(index.value(values, P.configurable_variations)):
        if not ref.sku:
            log.debug("Configurable %s: variation without sku (%s); skipped", handle, ref.attributes)
            continue
        simple = simples.pop(ref.sku, None)
        if simple is None:
            counters.variant_sku_not_found += 1
            log.info("Configurable %s: variant SKU %s not found among simple products", handle, ref.sku)
            continue
        counters.variants_processed += 1
        resolved.append((simple, ref.option_value(option_name) or ref.sku))

    if not resolved:
        counters.configurables_without_variants += 1
        variant = build_variant(index, values, base_image_url)
        return [ParentVariantRow(handle=handle, product=details, variant=variant, source_type=CONFIGURABLE)]

    # the first simple supplies every variant column of the parent row, image included
    rows: List[ShopifyProductRow] = []
    for position, (simple, option_value) in enumerate(resolved, start=1):
        variant = build_variant(index, simple, base_image_url, option_name, option_value, image_position=position)
        if position == 1:
            rows.append(ParentVariantRow(handle=handle, product=details, variant=variant, source_type=CONFIGURABLE))
        else:
            rows.append(ContinuationVariantRow(handle=handle, variant=variant))
    return rows


def parse_magento_product_csv(text: str, base_image_url: Optional[str] = None) -> ParseProductResult:
    lines = split_lines(text)
    if not lines:
        return ParseProductResult(ResultType.parse_error, "The CSV file is empty.")
    if len(lines) < 2:
        return ParseProductResult(
            ResultType.parse_error,
            "The CSV file must contain a header row and at least one data row.",
        )

    delimiter = detect_delimiter(lines[0])
    index = resolve_headers(clean_headers(parse_csv_line(lines[0], delimiter)), PRODUCT_ALIASES)
    if not index.has(P.sku):
        return ParseProductResult(ResultType.parse_error, 'CSV must contain "sku" column for product import.')

    counters = _Counters()
    simples, configurables = classify_rows(index, lines[1:], delimiter, counters)

    rows: List[ShopifyProductRow] = []
    for values in configurables:
        rows.extend(expand_configurable(index, values, simples, base_image_url, counters))

    for sku, values in simples.items():
        variant = build_variant(index, values, base_image_url)
        rows.append(ParentVariantRow(handle=sku, product=product_details(index, values), variant=variant))
        counters.standalone_count += 1

    stats = counters.freeze(rows_emitted=len(rows))
    log.info(
        "Products: %d rows from %d lines (%d simple, %d configurable, %d variants, %d variant SKUs not found, "
        "%d skipped without SKU, %d column mismatches, %d other types)",
        len(rows), stats.lines_processed, stats.simple_count, stats.configurable_count,
        stats.variants_processed, stats.variant_sku_not_found, stats.skipped_no_sku,
        stats.skipped_column_mismatch, stats.other_types_skipped,
    )
    if not rows:
        return ParseProductResult(
            ResultType.no_products_extracted,
            'No products found or extracted. Check that "product_type" is "simple" or "configurable" and that '
            "rows have a SKU and match the header's column count.",
            stats=stats,
        )
    return ParseProductResult(ResultType.products_found, summary_message(stats), data=tuple(rows), stats=stats)


def summary_message(stats: ConversionStats) -> str:
    msg = (
        f"{stats.rows_emitted} Shopify row(s) generated: {stats.standalone_count} standalone product(s), "
        f"{stats.configurable_count} configurable product(s) with {stats.variants_processed} variant(s)."
    )
    skipped = stats.skipped_no_sku + stats.skipped_column_mismatch + stats.other_types_skipped
    if skipped:
        msg += f" {skipped} row(s) skipped."
    if stats.variant_sku_not_found:
        msg += f" {stats.variant_sku_not_found} variant reference(s) could not be resolved."
    return msg + " Review and edit if needed."


def _bool(flag: bool) -> str:
    return "TRUE" if flag else "FALSE"


def product_to_row(row: ShopifyProductRow) -> list:
    v = row.variant
    out = {h: "" for h in PRODUCT_HEADERS}
    out["Handle"] = row.handle
    if isinstance(row, ParentVariantRow):
        p = row.product
        out["Title"] = p.title
        out["Body (HTML)"] = p.body_html
        out["Vendor"] = p.vendor
        out["Type"] = p.product_type
        out["Tags"] = p.tags
        out["SEO Title"] = p.seo_title
        out["SEO Description"] = p.seo_description
    out["Published"] = _bool(v.published)
    out["Option1 Name"] = v.option1_name
    out["Option1 Value"] = v.option1_value
    out["Variant SKU"] = v.sku
    out["Variant Grams"] = format_number(v.weight)
    out["Variant Inventory Tracker"] = "shopify"
    out["Variant Inventory Qty"] = str(v.inventory_qty)
    out["Variant Inventory Policy"] = "deny"
    out["Variant Fulfillment Service"] = "manual"
    out["Variant Price"] = format_number(v.price)
    out["Variant Requires Shipping"] = _bool(v.requires_shipping)
    out["Variant Taxable"] = _bool(v.taxable)
    out["Image Src"] = v.image_src
    out["Image Position"] = str(v.image_position)
    out["Gift Card"] = "FALSE"
    out["Variant Image"] = v.image_src
    out["Variant Weight Unit"] = v.weight_unit
    out["Status"] = "active" if v.published else "draft"
    return [out[h] for h in PRODUCT_HEADERS]


def generate_shopify_product_csv(rows: Iterable[ShopifyProductRow]) -> str:
    return rows_to_csv(PRODUCT_HEADERS, (product_to_row(r) for r in rows))


def transform(input_path: Path, base_image_url: Optional[str] = None) -> ParseProductResult:
    return parse_magento_product_csv(read_text(input_path), base_image_url=base_image_url)


def write_output(output_path: Path, rows: Iterable[ShopifyProductRow]) -> None:
    write_text(output_path, generate_shopify_product_csv(rows))
