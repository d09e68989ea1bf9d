#!/usr/bin/env python3
"""Convert a Magento customer or product CSV export into a Shopify import CSV."""
import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from magento_shopify.customers import generate_shopify_customer_csv, parse_magento_customer_csv
from magento_shopify.io import read_text, write_text
from magento_shopify.models import ResultType
from magento_shopify.transform import generate_shopify_product_csv, parse_magento_product_csv


EXIT_OK = 0
EXIT_EMPTY = 1
EXIT_ERROR = 2

log = logging.getLogger("magento_to_shopify")


def load_env_file(env_path: "Optional[str | Path]") -> None:
    """Load simple KEY=VALUE lines into os.environ. Ignores comments and blank lines."""
    if not env_path:
        return
    p = Path(env_path)
    if not p.exists():
        return
    for raw in p.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, val = line.split("=", 1)
        key = key.strip()
        val = val.strip().strip('"').strip("'")
        if key:
            os.environ[key] = val


def build_parser(parents: List[argparse.ArgumentParser]) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Transform a Magento CSV export to a Shopify import CSV.", parents=parents)
    parser.add_argument("--kind", choices=["products", "customers"], default=os.getenv("MAGENTO_KIND", "products"), help="Which export the input file is")
    parser.add_argument("--input", required=True, help="Path to the Magento CSV export")
    parser.add_argument("--output", required=True, help="Path to output Shopify CSV")
    parser.add_argument("--base-image-url", default=os.getenv("MAGENTO_BASE_IMAGE_URL", ""), help="Base URL for relative image paths (e.g. https://shop.example/media/catalog/product)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log per-file summaries")
    parser.add_argument("--debug", action="store_true", help="Log every skipped row")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_env_file(Path.cwd() / ".env")

    # Early parse to pick up --env-file so its values become defaults
    env_only = argparse.ArgumentParser(add_help=False)
    env_only.add_argument("--env-file", default="")
    early_args, remaining = env_only.parse_known_args(argv)
    load_env_file(early_args.env_file or None)

    args = build_parser([env_only]).parse_args(remaining)

    level = logging.WARNING
    if args.debug:
        level = logging.DEBUG
    elif args.verbose:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")

    input_path = Path(args.input)
    output_path = Path(args.output)
    try:
        text = read_text(input_path)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read {input_path}: {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.kind == "customers":
        result = parse_magento_customer_csv(text)
    else:
        result = parse_magento_product_csv(text, base_image_url=args.base_image_url or None)

    if result.type == ResultType.parse_error:
        print(f"Error: {result.message}", file=sys.stderr)
        return EXIT_ERROR
    if not result.ok:
        print(result.message, file=sys.stderr)
        if result.stats is not None:
            log.info("Stats: %s", result.stats.as_dict())
        return EXIT_EMPTY

    if args.kind == "customers":
        csv_text = generate_shopify_customer_csv(result.data)
    else:
        csv_text = generate_shopify_product_csv(result.data)
    write_text(output_path, csv_text)
    log.info("Stats: %s", result.stats.as_dict())
    print(result.message)
    print(f"Wrote {len(result.data)} Shopify rows to {output_path}")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
