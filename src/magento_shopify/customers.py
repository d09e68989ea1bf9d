"""Magento customer export → Shopify customer import.

The header row of a Magento customer export is not always on line 1 (some
export tools prepend banner lines), so it is located by scanning the top of
the file for known column names before any row is read.
"""
from __future__ import annotations
import logging
import uuid
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from .headers import HeaderIndex, HeaderNotFoundError, clean_headers, find_header_row, resolve_headers
from .io import parse_csv_line, read_text, rows_to_csv, split_lines, write_text
from .mapping import (
    CUSTOMER_ALIASES,
    CUSTOMER_HEADER_KEYWORDS,
    CUSTOMER_TAG_FIELDS,
    CustomerField as C,
)
from .models import CustomerRecord, CustomerStats, ParseCustomerResult, ResultType
from .normalize import strip_trailing_name


log = logging.getLogger(__name__)

CUSTOMER_HEADERS = [
    "First Name",
    "Last Name",
    "Email",
    "Company",
    "Address1",
    "Address2",
    "City",
    "Province",
    "Province Code",
    "Country",
    "Country Code",
    "Zip",
    "Phone",
    "Accepts Marketing",
    "Tags",
    "Note",
    "Tax Exempt",
]


def split_names(last_name_col: str, contact_person: str, first_name_col: str) -> Tuple[str, str]:
    """Derive (first, last) from the last-name column and a combined contact name."""
    first = ""
    last = last_name_col or ""

    if contact_person and last and last.lower() in contact_person.lower():
        candidate = strip_trailing_name(contact_person, last)
        if candidate and candidate.lower() != contact_person.lower():
            first = candidate

    if not first and contact_person:
        parts = contact_person.split()
        if parts:
            first = parts[0]
            if not last and len(parts) > 1:
                last = " ".join(parts[1:])

    if not first and first_name_col:
        first = first_name_col
    return first, last


def synthesize_tags(index: HeaderIndex[C], values: Sequence[str]) -> str:
    tags = []
    for fld, key in CUSTOMER_TAG_FIELDS:
        val = index.value(values, fld).strip()
        if val:
            tags.append(f"{key}:{val}")
    return ", ".join(tags)


def country_fields(value: str) -> Tuple[str, str]:
    """(country, country code); a bare ISO-2 code like 'NL' fills both."""
    if not value:
        return "", ""
    if len(value) == 2 and value.isupper():
        return value, value
    return value, ""


def fit_row(values: List[str], width: int) -> Optional[List[str]]:
    """Align a tokenized row to the header width, or None when it is too far off.

    Trailing empty cells beyond the header are dropped and a row missing
    trailing columns is padded, as long as it still has half of them.
    """
    n = len(values)
    if n == width:
        return values
    if n > width:
        if any(v for v in values[width:]):
            return None
        return values[:width]
    if n * 2 < width:
        return None
    return values + [""] * (width - n)


def build_customer(index: HeaderIndex[C], values: Sequence[str]) -> CustomerRecord:
    first, last = split_names(
        index.value(values, C.last_name),
        index.value(values, C.contact_person),
        index.value(values, C.first_name),
    )
    country, country_code = country_fields(index.value(values, C.country))
    return CustomerRecord(
        id=uuid.uuid4().hex,
        first_name=first,
        last_name=last,
        email=index.value(values, C.email),
        company=index.value(values, C.company),
        address1=index.value(values, C.address1),
        address2=index.value(values, C.address2),
        city=index.value(values, C.city),
        province=index.value(values, C.province),
        province_code=index.value(values, C.province_code),
        country=country,
        country_code=country_code,
        zip=index.value(values, C.zip),
        phone=index.value(values, C.phone),
        tags=synthesize_tags(index, values),
        note=index.value(values, C.note),
        # Magento has no reliable consent equivalent
        accepts_marketing=False,
        accepts_sms_marketing=False,
        tax_exempt=False,
    )


def parse_magento_customer_csv(text: str) -> ParseCustomerResult:
    lines = split_lines(text)
    if not lines:
        return ParseCustomerResult(ResultType.parse_error, "The CSV file is empty.")

    try:
        header_row, delimiter = find_header_row(lines, CUSTOMER_HEADER_KEYWORDS)
    except HeaderNotFoundError as e:
        return ParseCustomerResult(ResultType.parse_error, str(e))

    headers = clean_headers(parse_csv_line(lines[header_row], delimiter))
    index = resolve_headers(headers, CUSTOMER_ALIASES)
    log.debug("Customer header on line %d: %r", header_row + 1, index)

    customers: List[CustomerRecord] = []
    processed = skipped_empty = mismatched = dropped = 0
    for lineno, line in enumerate(lines[header_row + 1 :], start=header_row + 2):
        if not line.strip():
            continue
        processed += 1
        raw = parse_csv_line(line, delimiter)
        if all(v == "" for v in raw):
            skipped_empty += 1
            continue
        values = fit_row(raw, index.width)
        if values is None:
            mismatched += 1
            log.debug("Line %d: expected %d columns, got %d; skipped", lineno, index.width, len(raw))
            continue
        customer = build_customer(index, values)
        if not customer.has_identity():
            dropped += 1
            continue
        customers.append(customer)

    stats = CustomerStats(
        lines_processed=processed,
        skipped_empty=skipped_empty,
        skipped_column_mismatch=mismatched,
        dropped_no_identity=dropped,
        customers_found=len(customers),
    )
    log.info(
        "Customers: %d found, %d lines, %d column mismatches, %d without identifying data",
        len(customers), processed, mismatched, dropped,
    )
    if customers:
        return ParseCustomerResult(
            ResultType.customers_found,
            f"{len(customers)} customer(s) loaded from the CSV. Review and edit if needed.",
            data=tuple(customers),
            stats=stats,
        )
    return ParseCustomerResult(
        ResultType.no_customers_extracted,
        "CSV headers were recognized, but no valid customer data rows could be extracted. Check if rows have "
        "essential info like email or names, and ensure data aligns with headers.",
        stats=stats,
    )


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def customer_to_row(c: CustomerRecord) -> list:
    return [
        c.first_name, c.last_name, c.email, c.company, c.address1, c.address2, c.city, c.province,
        c.province_code, c.country, c.country_code, c.zip, c.phone, _yes_no(c.accepts_marketing), c.tags,
        c.note, _yes_no(c.tax_exempt),
    ]


def generate_shopify_customer_csv(customers: Iterable[CustomerRecord]) -> str:
    return rows_to_csv(CUSTOMER_HEADERS, (customer_to_row(c) for c in customers))


def convert_file(input_path: Path, output_path: Optional[Path] = None) -> ParseCustomerResult:
    """Read a Magento customer export and, when customers were found, write the Shopify CSV."""
    result = parse_magento_customer_csv(read_text(input_path))
    if result.ok and output_path is not None:
        write_text(output_path, generate_shopify_customer_csv(result.data))
    return result
