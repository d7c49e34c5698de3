# backend/app/services/csv_io/csv_processor.py
"""
CSV reading and writing for bulk import/export.

Structural problems (too few lines, rows with the wrong number of columns)
come back in ``ParseResult.errors`` instead of being raised, so callers can
show every problem in a file at once.
Generation applies the quoting rules the parser undoes, so anything written by
``generate_csv`` reads back to the same values through ``parse_csv``.
"""

import logging
import re
from datetime import date, datetime
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from ...schemas.csv_io import ParseResult

logger = logging.getLogger(__name__)

MIN_ROWS_ERROR = "CSV must have at least a header row and one data row"

_LINE_BREAK = re.compile(r"(\r?\n)")
_NEEDS_QUOTING = (",", '"', "\n", "\r")

# Non-ISO spellings accepted by parse_date; ISO forms are tried first.
DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%m-%d-%Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)


def _scan_line(line: str, in_quotes: bool = False) -> Tuple[List[str], bool]:
    """Split ``line`` into fields, returning them with the final quote state."""
    fields: List[str] = []
    current: List[str] = []
    i = 0
    length = len(line)
    while i < length:
        char = line[i]
        if char == '"' and in_quotes and i + 1 < length and line[i + 1] == '"':
            current.append('"')
            i += 2
            continue
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1
    fields.append("".join(current))
    return fields, in_quotes


def tokenize_csv_line(line: str) -> List[str]:
    """Return the field values encoded by one CSV record.

    A doubled quote inside a quoted field is a literal quote. Any other quote
    toggles quoting wherever it appears. An unterminated quote is not an
    error: the rest of the input simply belongs to the last field.
    """
    return _scan_line(line)[0]


def _iter_records(
    lines: Sequence[str], breaks: Sequence[str], start: int = 1
) -> Iterator[Tuple[int, str]]:
    """Yield ``(line_index, record)`` for each non-blank record from ``start``.

    A physical line that leaves a quoted field open continues onto the next
    line, keeping its original line break, so quoted values may contain
    newlines. If the input ends with the quote still open, the buffered
    lines are yielded one by one: a stray quote only affects its own line.
    Blank lines between records are skipped.
    """
    buffer: List[int] = []
    in_quotes = False
    for index in range(start, len(lines)):
        if not buffer and not lines[index].strip():
            continue
        buffer.append(index)
        _, in_quotes = _scan_line(lines[index], in_quotes)
        if not in_quotes:
            record = "".join(lines[i] + breaks[i] for i in buffer[:-1])
            yield buffer[0], record + lines[index]
            buffer = []

    if len(buffer) > 1:
        logger.debug(f"Unterminated quote on line {buffer[0] + 1}; not joining lines")
    for index in buffer:
        if lines[index].strip():
            yield index, lines[index]


def parse_csv(text: str) -> ParseResult:
    """Parse CSV text into lower-cased headers and one dict per data row.

    Rows whose column count differs from the header are reported and dropped.
    Row numbers in errors are 1-based source line numbers (the header is
    row 1).
    """
    parts = _LINE_BREAK.split(text.strip())
    lines, breaks = parts[0::2], parts[1::2]
    if len(lines) < 2:
        return ParseResult(headers=[], data=[], errors=[MIN_ROWS_ERROR])

    headers = [header.strip().lower() for header in tokenize_csv_line(lines[0])]
    data: List[Dict[str, str]] = []
    errors: List[str] = []

    for index, record in _iter_records(lines, breaks):
        values = tokenize_csv_line(record.strip())
        if len(values) != len(headers):
            errors.append(
                f"Row {index + 1}: Column count ({len(values)}) doesn't match "
                f"header count ({len(headers)})"
            )
            continue
        data.append(
            {header: (value or "").strip() for header, value in zip(headers, values)}
        )

    logger.debug(
        f"Parsed CSV: {len(headers)} columns, {len(data)} rows, {len(errors)} errors"
    )
    return ParseResult(headers=headers, data=data, errors=errors)


def parse_date(value: Any) -> Optional[date]:
    """Interpret ``value`` as a calendar date, or return None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def get_nested_value(record: Any, path: str) -> Any:
    """Walk ``record`` along a dotted ``path``; a missing link yields ``""``."""
    value = record
    for key in path.split("."):
        if value is None:
            return ""
        if isinstance(value, Mapping):
            value = value.get(key)
        else:
            value = getattr(value, key, None)
    return value


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def escape_csv_value(value: Any) -> str:
    """Render one field, quoting it when it holds a comma, quote or line break."""
    text = _stringify(value)
    if any(marker in text for marker in _NEEDS_QUOTING):
        return '"' + text.replace('"', '""') + '"'
    return text


def generate_csv(data: Sequence[Any], headers: Sequence[str]) -> str:
    """Render records as CSV text with ``headers`` as the first line.

    Header names are written verbatim. Each header is also the lookup path
    into a record, so ``"profile.firstName"`` reads a nested value.
    """
    rows = [",".join(headers)]
    for record in data:
        rows.append(
            ",".join(
                escape_csv_value(get_nested_value(record, header)) for header in headers
            )
        )
    return "\n".join(rows)


__all__ = [
    "MIN_ROWS_ERROR",
    "DATE_FORMATS",
    "tokenize_csv_line",
    "parse_csv",
    "parse_date",
    "get_nested_value",
    "escape_csv_value",
    "generate_csv",
]
