"""
Tabular input: uploaded bytes -> raw rows.

Responsibilities:
- first worksheet of an .xlsx/.xlsm workbook, typed cells as openpyxl reads them
- CSV with encoding detection + delimiter sniffing, every cell as text
"""

from __future__ import annotations

import csv
import io
import logging
import zipfile
from typing import Any, List, Optional, Sequence
from xml.etree.ElementTree import ParseError

from charset_normalizer import from_bytes
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from .rules import (
    CSV_DELIMITERS,
    LEGACY_EXCEL_EXTENSION,
    SUPPORTED_EXTENSIONS,
    XLSX_EXTENSIONS,
)

logger = logging.getLogger(__name__)

RawRow = Optional[Sequence[Any]]


class UnsupportedFileError(ValueError):
    """The file type cannot be read as a contact table."""


class UnreadableFileError(ValueError):
    """The file has a supported extension but its content cannot be parsed."""


def read_xlsx_rows(raw: bytes) -> List[RawRow]:
    try:
        workbook = load_workbook(io.BytesIO(raw), read_only=True, data_only=True)
    except (zipfile.BadZipFile, InvalidFileException, ParseError, SyntaxError, ValueError, KeyError, OSError) as e:
        raise UnreadableFileError(f"Cannot read workbook: {e}") from e

    # read-only sheets are parsed lazily, so broken XML only surfaces here
    try:
        if not workbook.worksheets:
            return []
        sheet = workbook.worksheets[0]
        rows = [tuple(row) for row in sheet.iter_rows(values_only=True)]
    except (zipfile.BadZipFile, ParseError, SyntaxError, ValueError, KeyError) as e:
        raise UnreadableFileError(f"Cannot read worksheet: {e}") from e
    finally:
        workbook.close()

    logger.debug("Read %d row(s) from sheet %r", len(rows), sheet.title)
    return rows


def decode_text(raw: bytes) -> str:
    """
    Decode CSV bytes using a best-effort detected encoding.

    A UTF-8 BOM is dropped. If the detected codec fails, UTF-8 is tried, then
    the detected codec with replacement characters.
    """
    match = from_bytes(raw).best()
    decode_used = match.encoding if match is not None else "utf-8"

    if raw.startswith(b"\xef\xbb\xbf") and decode_used.lower().replace("-", "_") in ("utf_8", "utf8"):
        decode_used = "utf-8-sig"

    try:
        return raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        logger.warning("Decoding with %s failed, falling back to utf-8", decode_used)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            return raw.decode("utf-8", errors="replace")


def detect_delimiter(sample: str) -> str:
    try:
        return csv.Sniffer().sniff(sample, delimiters=CSV_DELIMITERS).delimiter
    except csv.Error:
        return ","


def read_csv_rows(raw: bytes) -> List[RawRow]:
    text = decode_text(raw)
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    delimiter = detect_delimiter(text[:4096])

    rows: List[RawRow] = list(csv.reader(io.StringIO(text, newline=""), delimiter=delimiter))
    logger.debug("Read %d CSV row(s), delimiter=%r", len(rows), delimiter)
    return rows


def check_supported(filename: str) -> None:
    """Raise UnsupportedFileError unless the extension is one we can read."""
    name = filename.lower()
    if name.endswith(SUPPORTED_EXTENSIONS):
        return
    if name.endswith(LEGACY_EXCEL_EXTENSION):
        raise UnsupportedFileError("Legacy .xls workbooks are not supported, save the file as .xlsx")
    raise UnsupportedFileError("Please provide an Excel (.xlsx) or CSV file")


def read_table(raw: bytes, filename: str) -> List[RawRow]:
    check_supported(filename)
    if filename.lower().endswith(XLSX_EXTENSIONS):
        return read_xlsx_rows(raw)
    return read_csv_rows(raw)
