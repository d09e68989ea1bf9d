#!/usr/bin/env python3
"""Report how Magento export headers resolve before running a conversion.

Usage: analyze_inputs.py FILE [FILE ...]
"""
import sys
from pathlib import Path
from collections import Counter

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / 'src'))
from magento_shopify.headers import HeaderNotFoundError, clean_headers, find_header_row, resolve_headers  # type: ignore
from magento_shopify.io import detect_delimiter, parse_csv_line, read_text, split_lines  # type: ignore
from magento_shopify.mapping import (  # type: ignore
    CUSTOMER_ALIASES, CUSTOMER_HEADER_KEYWORDS, PRODUCT_ALIASES, ProductField,
)


def analyze(path: Path) -> None:
    lines = split_lines(read_text(path))
    print(f'\n== {path.name} ({len(lines)} lines)')
    if not lines:
        print('empty file')
        return

    delimiter = detect_delimiter(lines[0])
    headers = clean_headers(parse_csv_line(lines[0], delimiter))
    if 'sku' in headers:
        index = resolve_headers(headers, PRODUCT_ALIASES)
        print(f"Product export, delimiter '{delimiter}', {index.width} columns")
        print('Resolved:', ', '.join(f'{f.value}@{index.position(f)}' for f in index.resolved()))
        missing = [f.value for f in PRODUCT_ALIASES if not index.has(f)]
        print('Missing:', ', '.join(missing) or '-')
        types = Counter()
        for line in lines[1:]:
            values = parse_csv_line(line, delimiter)
            types[(index.value(values, ProductField.product_type) or 'simple').lower()] += 1
        print('Product types:')
        for k, v in types.most_common():
            print(f'- {k}: {v}')
        return

    try:
        row, delimiter = find_header_row(lines, CUSTOMER_HEADER_KEYWORDS)
    except HeaderNotFoundError as e:
        print(f'Not a recognizable export: {e}')
        return
    index = resolve_headers(clean_headers(parse_csv_line(lines[row], delimiter)), CUSTOMER_ALIASES)
    print(f"Customer export, header on line {row + 1}, delimiter '{delimiter}', {index.width} columns")
    print('Resolved:', ', '.join(f'{f.value}@{index.position(f)}' for f in index.resolved()))
    print(f'Data lines: {len(lines) - row - 1}')


def main(argv=None) -> int:
    paths = [Path(p) for p in (argv if argv is not None else sys.argv[1:])]
    if not paths:
        print(__doc__)
        return 2
    for p in paths:
        analyze(p)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
