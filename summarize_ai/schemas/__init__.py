"""Pydantic schemas for request/response validation."""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


# ─── Length mode ─────────────────────────────────────────────────────────────

class SummaryLength(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"

    @classmethod
    def normalize(cls, value: Optional[str]) -> "SummaryLength":
        """Map a raw form value to a length mode, falling back to medium."""
        if isinstance(value, cls):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.MEDIUM

    @property
    def label(self) -> str:
        return LENGTH_LABELS[self]


LENGTH_LABELS = {
    SummaryLength.SHORT: "Brief",
    SummaryLength.MEDIUM: "Standard",
    SummaryLength.LONG: "Detailed",
}


# ─── Summaries ───────────────────────────────────────────────────────────────

class SummarizeResponse(BaseModel):
    """Result of a single upload-and-summarize request."""

    id: Optional[UUID] = None
    filename: str
    page_count: Optional[int] = Field(default=None, alias="pageCount")
    text_length: int = Field(alias="textLength")
    summary: str
    summary_length: SummaryLength = Field(alias="summaryLength")
    created_at: datetime = Field(alias="createdAt")

    class Config:
        populate_by_name = True


class SummaryListItem(BaseModel):
    """History projection: everything except the extracted text."""

    id: UUID
    original_filename: str
    file_size: int
    page_count: Optional[int] = None
    summary: str
    summary_length: SummaryLength
    created_at: datetime

    class Config:
        from_attributes = True


class SummaryDetail(SummaryListItem):
    extracted_text: str


# ─── Misc ────────────────────────────────────────────────────────────────────

class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime


class ErrorResponse(BaseModel):
    error: str
