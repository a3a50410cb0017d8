"""
ContactRecord -> vCard 3.0 text.

The card is built from CARD_LINES, an ordered table of (predicate, formatter)
pairs. Order is fixed; a line is emitted only when its predicate holds.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from .models import ContactRecord
from .rules import ADDRESS_FIELDS, LINE_TERMINATOR, VCARD_VERSION

Escape = Callable[[str], str]
CardLine = Tuple[Callable[[ContactRecord], bool], Callable[[ContactRecord, Escape], str]]


def escape_value(value: str) -> str:
    # RFC 6350 text escaping: backslash, semicolon, comma, newline
    return (
        value
        .replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
    )


def _verbatim(value: str) -> str:
    return value


def resolve_name(record: ContactRecord) -> str:
    if record.name:
        return record.name
    return f"{record.firstname or ''} {record.lastname or ''}".strip()


def _has_address(record: ContactRecord) -> bool:
    return any(getattr(record, k) for k in ADDRESS_FIELDS)


def _address(record: ContactRecord, esc: Escape) -> str:
    return "ADR:;;" + ";".join(esc(getattr(record, k) or "") for k in ADDRESS_FIELDS)


CARD_LINES: List[CardLine] = [
    (lambda r: True, lambda r, esc: "BEGIN:VCARD"),
    (lambda r: True, lambda r, esc: f"VERSION:{VCARD_VERSION}"),
    (lambda r: True, lambda r, esc: f"FN:{esc(resolve_name(r))}"),
    # key presence, not non-emptiness
    (
        lambda r: r.lastname is not None or r.firstname is not None,
        lambda r, esc: f"N:{esc(r.lastname or '')};{esc(r.firstname or '')};;;",
    ),
    (lambda r: bool(r.phone), lambda r, esc: f"TEL;TYPE=VOICE:{esc(r.phone)}"),
    (lambda r: bool(r.mobile), lambda r, esc: f"TEL;TYPE=CELL:{esc(r.mobile)}"),
    (lambda r: bool(r.email), lambda r, esc: f"EMAIL;TYPE=INTERNET:{esc(r.email)}"),
    (_has_address, _address),
    (lambda r: bool(r.company), lambda r, esc: f"ORG:{esc(r.company)}"),
    (lambda r: bool(r.title), lambda r, esc: f"TITLE:{esc(r.title)}"),
    (lambda r: bool(r.website), lambda r, esc: f"URL:{esc(r.website)}"),
    (lambda r: True, lambda r, esc: "END:VCARD"),
]


def card_lines(record: ContactRecord, escape: bool = False) -> List[str]:
    esc = escape_value if escape else _verbatim
    return [fmt(record, esc) for applies, fmt in CARD_LINES if applies(record)]


def encode_card(record: ContactRecord, escape: bool = False) -> Optional[str]:
    """
    Render one record as a vCard, or None when it has no usable name.

    Values are inserted verbatim unless `escape` is set.
    """
    if not resolve_name(record):
        return None
    return "".join(line + LINE_TERMINATOR for line in card_lines(record, escape=escape))
