#!/usr/bin/env python3
"""Basic smoke test for the converter modules.

Converts a small built-in Magento product export and checks the Shopify
header, the configurable folding and that a second run is byte-identical.
No network, no files written.
"""
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / 'src'))

from magento_shopify.transform import (  # type: ignore
    PRODUCT_HEADERS, generate_shopify_product_csv, parse_magento_product_csv,
)

SAMPLE = "\n".join([
    "sku,product_type,name,price,qty,categories,base_image,configurable_variations,configurable_variation_labels",
    "TEE-S,simple,Tee S,19.99,5,,/t/e/tee-s.jpg,,",
    "TEE-M,simple,Tee M,19.99,3,,/t/e/tee-m.jpg,,",
    'TEE,configurable,Tee,19.99,0,"Default Category/Men/Shirts",/t/e/tee.jpg,"sku=TEE-S,size=S|sku=TEE-M,size=M",size=Size',
    "MUG,simple,Mug,\"7,50\",12,Default Category/Home,,,",
])


def main() -> int:
    result = parse_magento_product_csv(SAMPLE, base_image_url='https://shop.example/media/catalog/product')
    if not result.ok:
        print(f"Smoke test failed: {result.type.value}: {result.message}")
        return 1
    out = generate_shopify_product_csv(result.data)
    header = out.split("\n")[0].split(",")
    if len(header) != len(PRODUCT_HEADERS):
        print(f"Smoke test failed: header has {len(header)} columns")
        return 1
    handles = [r.handle for r in result.data]
    if handles != ['TEE', 'TEE', 'MUG']:
        print(f"Smoke test failed: unexpected handles {handles}")
        return 1
    again = generate_shopify_product_csv(parse_magento_product_csv(SAMPLE, 'https://shop.example/media/catalog/product').data)
    if again != out:
        print("Smoke test failed: output not deterministic")
        return 1
    print(f"Smoke test ok: {len(result.data)} rows; {result.message}")
    print("Stats:", result.stats.as_dict())
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
