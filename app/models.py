from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from .rules import DEFAULT_QUOTE_STYLE


class QuoteStyle(str, Enum):
    single = "single"
    double = "double"


class FormatRequest(BaseModel):
    text: str = Field(default="", examples=["id1\nid2,id3"])
    quote: QuoteStyle = Field(default=QuoteStyle(DEFAULT_QUOTE_STYLE))


class ReportItem(BaseModel):
    item: Optional[int] = None
    issue: str
    value: Optional[str] = None
    action: str


class FormatReport(BaseModel):
    segments: int = 0
    blank_segments_dropped: int = 0
    delimiters: Dict[str, int] = Field(default_factory=dict)
    encoding: Optional[Dict[str, Any]] = None
    warnings: List[ReportItem] = Field(default_factory=list)


class FormatResponse(BaseModel):
    result: str
    count: int
    quote: QuoteStyle
    sha256: str
    report: FormatReport


class HealthResponse(BaseModel):
    ok: bool = True
