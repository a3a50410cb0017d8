"""
Batch glue: table -> records -> cards -> files.

A record without a usable name is a skip, never a batch failure.
"""

from __future__ import annotations

import base64
import hashlib
import logging
import re
from pathlib import Path
from typing import List, Sequence, Set, Tuple

from .encode import encode_card, resolve_name
from .models import (
    Card,
    CardFile,
    ContactRecord,
    ConversionResult,
    ConversionSummary,
    ConvertResponse,
    SkippedRow,
)
from .normalize import normalize_table
from .rules import CARD_ENCODING, CARD_EXTENSION
from .sources import read_table

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME = re.compile(r"[\s/]")

SKIP_NO_NAME = "no name found"


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def card_filename(name: str, taken: Set[str]) -> str:
    """File name for a card; suffixes _2, _3, ... avoid clobbering within a batch."""
    stem = _UNSAFE_FILENAME.sub("_", name)
    filename = stem + CARD_EXTENSION
    n = 2
    while filename.lower() in taken:
        filename = f"{stem}_{n}{CARD_EXTENSION}"
        n += 1
    taken.add(filename.lower())
    return filename


def convert_records(records: Sequence[ContactRecord], escape: bool = False) -> ConversionResult:
    result = ConversionResult(records=len(records))
    taken: Set[str] = set()

    for idx, record in enumerate(records):
        row = record.source_row if record.source_row is not None else idx + 1
        content = encode_card(record, escape=escape)
        if content is None:
            result.skipped.append(SkippedRow(row=row, reason=SKIP_NO_NAME))
            continue
        filename = card_filename(resolve_name(record), taken)
        result.cards.append(Card(row=row, filename=filename, content=content))

    return result


def convert_bytes(raw: bytes, filename: str, escape: bool = False) -> ConversionResult:
    rows = read_table(raw, filename)
    records = normalize_table(rows)
    logger.debug("%s: %d contact record(s)", filename, len(records))
    return convert_records(records, escape=escape)


def write_cards(result: ConversionResult, output_dir: Path) -> Tuple[List[Path], int]:
    """
    Write every card to output_dir. Returns (written paths, failed writes).

    Writes and skips are logged together in source row order. A failed write
    is logged and counted; the batch keeps going.
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    outcomes = sorted([*result.cards, *result.skipped], key=lambda o: o.row or 0)

    written: List[Path] = []
    failed = 0
    for card in outcomes:
        if isinstance(card, SkippedRow):
            logger.warning("Skipped row %s: No name found", card.row)
            continue
        path = output_dir / card.filename
        try:
            path.write_text(card.content, encoding=CARD_ENCODING, newline="")
        except OSError as e:
            logger.error("Failed to create %s: %s", card.filename, e)
            failed += 1
            continue
        logger.info("Created: %s", card.filename)
        written.append(path)
    return written, failed


def to_response(result: ConversionResult) -> ConvertResponse:
    cards = []
    for card in result.cards:
        data = card.content.encode(CARD_ENCODING)
        cards.append(CardFile(
            row=card.row,
            filename=card.filename,
            sha256=_sha256_hex(data),
            content_b64=base64.b64encode(data).decode("ascii"),
        ))

    return ConvertResponse(
        summary=ConversionSummary(
            records=result.records,
            created=len(cards),
            skipped=len(result.skipped),
        ),
        cards=cards,
        skipped=result.skipped,
    )
