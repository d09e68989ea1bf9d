from __future__ import annotations
import math
import re
from decimal import Decimal
from typing import List


LEADING_INT = re.compile(r"^[+-]?\d+")


def parse_decimal(s: str | None) -> float:
    """Parse a price/weight that may use a decimal comma. Bad input gives 0."""
    if not s:
        return 0.0
    v = s.strip().replace(" ", "")
    if "," in v and "." in v:
        # whichever separator comes last is the decimal mark
        if v.rfind(",") > v.rfind("."):
            v = v.replace(".", "").replace(",", ".")
        else:
            v = v.replace(",", "")
    else:
        v = v.replace(",", ".")
    try:
        f = float(v)
    except ValueError:
        return 0.0
    if math.isnan(f) or math.isinf(f):
        return 0.0
    return f


def parse_int(s: str | None) -> int:
    # Magento exports qty as "100.0000"; only the integer part counts
    if not s:
        return 0
    m = LEADING_INT.match(s.strip())
    return int(m.group(0)) if m else 0


def format_number(v: float) -> str:
    """Plain decimal text at full precision: 10.0 gives "10", 4e-05 gives "0.00004"."""
    return format(Decimal(repr(float(v))).normalize(), "f")


def extract_tags_from_categories(categories: str | None) -> str:
    if not categories:
        return ""
    tags: List[str] = []
    for path in categories.split(","):
        for part in path.split("/"):
            tag = part.strip()
            if not tag or tag.lower() == "default category":
                continue
            if tag not in tags:
                tags.append(tag)
    return ", ".join(tags)


def strip_trailing_name(text: str, name: str) -> str:
    if not text:
        return ""
    cleaned = re.sub(rf"\s*{re.escape(name)}$", "", text, flags=re.IGNORECASE)
    return cleaned.strip()
