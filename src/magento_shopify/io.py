from __future__ import annotations
import re
from pathlib import Path
from typing import Iterable, List, Optional, Sequence


Cell = Optional[object]

LINE_BREAK = re.compile(r"\r?\n")


def detect_delimiter(line: str) -> str:
    """Pick ';' when the line has strictly more semicolons than commas, else ','."""
    return ";" if line.count(";") > line.count(",") else ","


def parse_csv_line(line: str, delimiter: str = ",") -> List[str]:
    """Split one CSV line into trimmed fields.

    Doubled quotes inside a quoted section produce a literal quote. An
    unterminated quote keeps the rest of the line in the current field.
    """
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0
    n = len(line)
    while i < n:
        ch = line[i]
        if ch == '"':
            if in_quotes and i + 1 < n and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif ch == delimiter and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1
    fields.append("".join(current))
    return [f.strip() for f in fields]


def split_lines(text: str) -> List[str]:
    """Trim the whole text and split it on LF or CRLF. Empty text gives []."""
    stripped = (text or "").strip()
    if not stripped:
        return []
    return LINE_BREAK.split(stripped)


def escape_csv_field(value: Cell) -> str:
    if value is None:
        return ""
    s = str(value)
    if "," in s or '"' in s or "\n" in s:
        return '"' + s.replace('"', '""') + '"'
    return s


def rows_to_csv(headers: Sequence[str], rows: Iterable[Sequence[Cell]]) -> str:
    lines = [",".join(escape_csv_field(h) for h in headers)]
    for row in rows:
        lines.append(",".join(escape_csv_field(c) for c in row))
    return "\n".join(lines)


def read_text(input_path: Path) -> str:
    # BOM is left in place; header cleaning strips it from column 0
    with input_path.open("r", newline="", encoding="utf-8") as f:
        return f.read()


def write_text(output_path: Path, text: str) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", newline="", encoding="utf-8") as f:
        f.write(text)
