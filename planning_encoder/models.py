from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .config import settings


class EncodeRequest(BaseModel):
    text: Optional[str] = Field(default=None, max_length=settings.max_text_length)


class EncodeResponse(BaseModel):
    encoded: str
    tags: List[str] = Field(default_factory=list)


class DecodeRequest(BaseModel):
    encoded: str = Field(max_length=settings.max_text_length)


class RuleModel(BaseModel):
    ordinal: int = Field(ge=0, le=4)
    weekday: str = Field(examples=["Ve"])
    timeslot: str = Field(examples=["Mf"])
    time: str = Field(examples=["10h"])
    categories: List[str] = Field(default_factory=list, examples=[["Fr", "Se"]])


class DecodeResponse(BaseModel):
    rules: List[RuleModel] = Field(default_factory=list)
    description: str = ""


class PreprocessRequest(BaseModel):
    text: Optional[str] = Field(default=None, max_length=settings.max_text_length)


class PreprocessResponse(BaseModel):
    processed: str
    planning: Optional[str] = None


class BatchItem(BaseModel):
    row: int
    source: str
    processed: str
    planning: Optional[str] = None


class BatchSummary(BaseModel):
    rows: int = 0
    with_planning: int = 0
    warnings: int = 0
    sha256: str


class ReportItem(BaseModel):
    row: Optional[int] = None
    column: Optional[str] = None
    issue: str
    value: Optional[str] = None
    action: str


class BatchReport(BaseModel):
    summary: BatchSummary
    encoding: Dict[str, Any] = Field(default_factory=dict)
    delimiter: Dict[str, Any] = Field(default_factory=dict)
    warnings: List[ReportItem] = Field(default_factory=list)


class BatchResponse(BaseModel):
    items: List[BatchItem] = Field(default_factory=list)
    report: BatchReport


class HealthResponse(BaseModel):
    ok: bool = True
