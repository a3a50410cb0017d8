"""
Row normalization: raw table rows -> ContactRecords.

Responsibilities:
- header normalization (trim, lower-case, whitespace removed)
- typed cell -> string conversion
- dropping blank cells, blank headers and empty rows

Nothing here raises for a bad row. The only fatal condition is a table with
no header row.
"""

from __future__ import annotations

import math
import re
from typing import Any, Iterable, List, Optional, Sequence

from .models import ContactRecord

_WHITESPACE = re.compile(r"\s+")


class MissingHeaderError(ValueError):
    """The table has no header row, so no column can be mapped."""


def normalize_header(value: Any) -> str:
    if value is None:
        return ""
    return _WHITESPACE.sub("", cell_to_string(value).strip().lower())


def cell_to_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    # bool before int: True is an int in Python
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return ""
        # truncate toward zero, never round
        return str(int(value))
    return ""


def normalize_row(header: Sequence[str], row: Optional[Sequence[Any]], source_row: Optional[int] = None) -> Optional[ContactRecord]:
    """Map one data row onto the header, or None when nothing survives."""
    if row is None:
        return None

    fields = {}
    for i, key in enumerate(header):
        if not key or i >= len(row):
            continue
        value = cell_to_string(row[i]).strip()
        if value:
            fields[key] = value

    record = ContactRecord.from_fields(fields, source_row=source_row)
    if record.is_empty():
        return None
    return record


def normalize_rows(header: Sequence[Any], rows: Iterable[Optional[Sequence[Any]]], first_row_number: int = 2) -> List[ContactRecord]:
    keys = [normalize_header(h) for h in header]

    records: List[ContactRecord] = []
    for offset, row in enumerate(rows):
        record = normalize_row(keys, row, source_row=first_row_number + offset)
        if record is not None:
            records.append(record)
    return records


def normalize_table(rows: Sequence[Optional[Sequence[Any]]]) -> List[ContactRecord]:
    """
    Treat the first row as the header and normalize the rest.

    Raises MissingHeaderError when there is no first row or none of its cells
    names a column.
    Zero data rows is not an error; the result is simply empty.
    """
    if not rows or rows[0] is None or all(not normalize_header(cell) for cell in rows[0]):
        raise MissingHeaderError("No headers found in input file")

    return normalize_rows(rows[0], rows[1:], first_row_number=2)
