from __future__ import annotations
from enum import Enum
from typing import Dict, Tuple


class CustomerField(str, Enum):
    email = "email"
    first_name = "first_name"
    last_name = "last_name"
    address1 = "address1"
    address2 = "address2"
    company = "company"
    contact_person = "contact_person"
    phone = "phone"
    country = "country"
    city = "city"
    zip = "zip"
    province = "province"
    province_code = "province_code"
    website = "website"
    store = "store"
    group_id = "group_id"
    created_at = "created_at"
    note = "note"
    vat_number = "vat_number"


class ProductField(str, Enum):
    sku = "sku"
    name = "name"
    description = "description"
    short_description = "short_description"
    price = "price"
    qty = "qty"
    categories = "categories"
    image = "image"
    product_type = "product_type"
    visibility = "visibility"
    tax_class = "tax_class"
    weight = "weight"
    meta_title = "meta_title"
    meta_description = "meta_description"
    attribute_set = "attribute_set"
    vendor = "vendor"
    product_online = "product_online"
    configurable_variations = "configurable_variations"
    configurable_variation_labels = "configurable_variation_labels"


# Ordered: the first alias present in the header wins.
CUSTOMER_ALIASES: Dict[CustomerField, Tuple[str, ...]] = {
    CustomerField.email: ("email",),
    CustomerField.first_name: ("firstname", "first_name", "first name"),
    CustomerField.last_name: ("lastname", "last_name", "last name"),
    CustomerField.address1: ("company_address", "street", "address", "address1", "billing_street", "shipping_street"),
    CustomerField.address2: ("address2", "street2", "billing_street2", "shipping_street2"),
    CustomerField.company: ("company_name", "company"),
    CustomerField.contact_person: ("contact_person",),
    CustomerField.phone: ("contact_phone", "telephone", "phone", "billing_telephone", "shipping_telephone"),
    CustomerField.country: ("land", "country_id", "country", "country_code", "billing_country_id", "shipping_country_id"),
    CustomerField.city: ("plaats", "city", "billing_city", "shipping_city"),
    CustomerField.zip: ("postcode", "zip", "zip_code", "postal_code", "billing_postcode", "shipping_postcode"),
    CustomerField.province: ("province", "state", "region", "billing_region", "shipping_region"),
    CustomerField.province_code: ("province_code", "state_code", "region_code", "billing_region_id", "shipping_region_id"),
    CustomerField.website: ("_website", "website"),
    CustomerField.store: ("_store", "store"),
    CustomerField.group_id: ("group_id", "customer_group"),
    CustomerField.created_at: ("created_at",),
    CustomerField.note: ("notes", "note", "customer_notes"),
    CustomerField.vat_number: ("vat_number", "taxvat", "billing_taxvat", "shipping_taxvat"),
}

# each keyword must stay an alias in CUSTOMER_ALIASES
CUSTOMER_HEADER_KEYWORDS: Tuple[str, ...] = (
    "email",
    "firstname",
    "lastname",
    "company_address",
    "company_name",
    "contact_phone",
    "land",
    "plaats",
    "postcode",
)

# key prefix used in synthesized customer tags
CUSTOMER_TAG_FIELDS: Tuple[Tuple[CustomerField, str], ...] = (
    (CustomerField.website, "magento_website"),
    (CustomerField.store, "magento_store"),
    (CustomerField.group_id, "magento_group_id"),
    (CustomerField.created_at, "magento_created_at"),
    (CustomerField.vat_number, "magento_vat_number"),
)

PRODUCT_ALIASES: Dict[ProductField, Tuple[str, ...]] = {
    ProductField.sku: ("sku",),
    ProductField.name: ("name",),
    ProductField.description: ("description",),
    ProductField.short_description: ("short_description",),
    ProductField.price: ("price",),
    ProductField.qty: ("qty",),
    ProductField.categories: ("categories",),
    ProductField.image: ("base_image", "image"),
    ProductField.product_type: ("product_type", "type_id"),
    ProductField.visibility: ("visibility",),
    ProductField.tax_class: ("tax_class_name", "tax_class_id"),
    ProductField.weight: ("weight",),
    ProductField.meta_title: ("meta_title",),
    ProductField.meta_description: ("meta_description",),
    ProductField.attribute_set: ("attribute_set_code",),
    ProductField.vendor: ("manufacturer", "brand", "vendor"),
    ProductField.product_online: ("product_online", "status"),
    ProductField.configurable_variations: ("configurable_variations",),
    ProductField.configurable_variation_labels: ("configurable_variation_labels",),
}

SIMPLE = "simple"
CONFIGURABLE = "configurable"

DISABLED_STATUSES = ("2", "disabled")


def infer_published(visibility: str | None, status: str | None) -> bool:
    """AND of the visibility and status signals; a missing signal counts as published."""
    published = True
    if visibility is not None:
        v = visibility.strip().lower()
        # Magento code 1 is "Not Visible Individually"
        if "not visible" in v or v == "1":
            published = False
    if status is not None and status.strip().lower() in DISABLED_STATUSES:
        published = False
    return published


def infer_taxable(tax_class: str | None) -> bool:
    if tax_class is None:
        return True
    t = tax_class.strip().lower()
    return "taxable goods" in t or t == "2"


def infer_vendor(vendor: str | None, attribute_set: str | None) -> str:
    v = (vendor or "").strip()
    if v:
        return v
    parts = (attribute_set or "").split()
    return parts[0] if parts else ""
