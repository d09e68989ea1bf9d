"""
Magento → Shopify catalog converter library.

This package provides the building blocks for:
- Tokenizing loosely formatted Magento CSV exports (comma or semicolon)
- Resolving column meaning from header aliases
- Reconciling customers and simple/configurable products into Shopify rows
- Emitting Shopify-compatible customer and product CSVs

Public API:
- io.detect_delimiter, io.parse_csv_line, io.escape_csv_field, io.rows_to_csv
- headers.resolve_headers, headers.find_header_row, headers.HeaderIndex
- mapping.CustomerField, mapping.ProductField, mapping.infer_published, mapping.infer_taxable
- normalize.parse_decimal, normalize.parse_int, normalize.extract_tags_from_categories
- images.build_full_image_url
- customers.parse_magento_customer_csv, customers.generate_shopify_customer_csv
- transform.parse_magento_product_csv, transform.generate_shopify_product_csv, transform.PRODUCT_HEADERS
"""

from . import io, headers, mapping, normalize, images, models, customers, transform  # re-export modules

__all__ = [
    "io",
    "headers",
    "mapping",
    "normalize",
    "images",
    "models",
    "customers",
    "transform",
]
