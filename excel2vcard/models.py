from __future__ import annotations

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from .rules import FIELD_VOCABULARY


class ContactRecord(BaseModel):
    """
    One normalized table row.

    A vocabulary field is None when its column was absent or blank for the row;
    present fields always hold a non-empty, trimmed string. Unrecognised
    headers are carried in `extra` but never rendered.
    """

    name: Optional[str] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    mobile: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None
    company: Optional[str] = None
    title: Optional[str] = None
    website: Optional[str] = None
    extra: Dict[str, str] = Field(default_factory=dict)
    source_row: Optional[int] = Field(default=None, examples=[2])

    @classmethod
    def from_fields(cls, fields: Dict[str, str], source_row: Optional[int] = None) -> "ContactRecord":
        known = {k: v for k, v in fields.items() if k in FIELD_VOCABULARY}
        extra = {k: v for k, v in fields.items() if k not in FIELD_VOCABULARY}
        return cls(**known, extra=extra, source_row=source_row)

    def as_dict(self) -> Dict[str, str]:
        out = {k: getattr(self, k) for k in FIELD_VOCABULARY if getattr(self, k) is not None}
        out.update(self.extra)
        return out

    def is_empty(self) -> bool:
        return not self.as_dict()


class CardFile(BaseModel):
    row: Optional[int] = None
    filename: str
    sha256: str
    content_b64: str


class Card(BaseModel):
    row: Optional[int] = None
    filename: str
    content: str


class SkippedRow(BaseModel):
    row: Optional[int] = None
    reason: str


class ConversionResult(BaseModel):
    records: int = 0
    cards: List[Card] = Field(default_factory=list)
    skipped: List[SkippedRow] = Field(default_factory=list)


class ConversionSummary(BaseModel):
    records: int = 0
    created: int = 0
    skipped: int = 0


class ConvertResponse(BaseModel):
    summary: ConversionSummary
    cards: List[CardFile] = Field(default_factory=list)
    skipped: List[SkippedRow] = Field(default_factory=list)


class ColumnsResponse(BaseModel):
    columns: List[str] = Field(default_factory=lambda: list(FIELD_VOCABULARY))


class HealthResponse(BaseModel):
    ok: bool = True
