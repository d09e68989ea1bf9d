from __future__ import annotations
from enum import Enum
from typing import Dict, Generic, List, Mapping, Sequence, Tuple, TypeVar

from .io import detect_delimiter, parse_csv_line


F = TypeVar("F", bound=Enum)

ABSENT = -1
HEADER_SCAN_LINES = 10
HEADER_KEYWORD_MIN = 2


class HeaderNotFoundError(ValueError):
    """No line in the scan window looks like a header row."""


class HeaderIndex(Generic[F]):
    """Column position per logical field, resolved once from a header row."""

    def __init__(self, positions: Mapping[F, int], width: int) -> None:
        self._positions: Dict[F, int] = dict(positions)
        self.width = width

    def position(self, field: F) -> int:
        return self._positions.get(field, ABSENT)

    def has(self, field: F) -> bool:
        return self.position(field) != ABSENT

    def value(self, values: Sequence[str], field: F) -> str:
        """Cell for ``field`` in a tokenized row, '' when unresolved or out of range."""
        idx = self.position(field)
        if idx == ABSENT or idx >= len(values):
            return ""
        return values[idx]

    def optional(self, values: Sequence[str], field: F) -> str | None:
        """Like value() but None when the column is not in the file."""
        if not self.has(field):
            return None
        return self.value(values, field)

    def resolved(self) -> List[F]:
        return [f for f, idx in self._positions.items() if idx != ABSENT]

    def __repr__(self) -> str:
        found = {f.value: i for f, i in self._positions.items() if i != ABSENT}
        return f"HeaderIndex({found}, width={self.width})"


def clean_headers(raw: Sequence[str]) -> List[str]:
    out: List[str] = []
    for idx, h in enumerate(raw):
        clean = h.strip().lower()
        if idx == 0:
            clean = clean.lstrip("\ufeff").strip()
        if len(clean) >= 2 and clean.startswith('"') and clean.endswith('"'):
            clean = clean[1:-1]
        out.append(clean)
    return out


def resolve_headers(headers: Sequence[str], aliases: Mapping[F, Sequence[str]]) -> HeaderIndex[F]:
    positions: Dict[F, int] = {}
    for field, names in aliases.items():
        positions[field] = ABSENT
        for alias in names:
            key = alias.strip().lower()
            if key in headers:
                positions[field] = headers.index(key)
                break
    return HeaderIndex(positions, width=len(headers))


def find_header_row(
    lines: Sequence[str],
    keywords: Sequence[str],
    required: str = "email",
    max_lines: int = HEADER_SCAN_LINES,
    min_keywords: int = HEADER_KEYWORD_MIN,
) -> Tuple[int, str]:
    """Locate the header among the first ``max_lines`` non-blank lines.

    A line qualifies when it has the ``required`` column or at least
    ``min_keywords`` of ``keywords``. Returns (line index, delimiter).
    """
    seen = 0
    for i, line in enumerate(lines):
        if seen >= max_lines:
            break
        if not line.strip():
            continue
        seen += 1
        delimiter = detect_delimiter(line)
        candidate = clean_headers(parse_csv_line(line, delimiter))
        found = sum(1 for k in keywords if k in candidate)
        if required in candidate or found >= min_keywords:
            return i, delimiter
    raise HeaderNotFoundError(
        'Could not find a valid header row in the CSV. Please ensure headers like "email", '
        '"firstname", "lastname" are present within the first few lines of the file.'
    )
