"""Summary model: stores PDF summarization history."""

import uuid
from datetime import datetime

from sqlalchemy import String, Text, Integer, DateTime, Enum, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from summarize_ai.core.database import Base

SUMMARY_LENGTHS = ("short", "medium", "long")


class SummaryRecord(Base):
    __tablename__ = "summaries"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    original_filename: Mapped[str] = mapped_column(String(500), nullable=False)
    file_size: Mapped[int] = mapped_column(Integer, nullable=False)
    page_count: Mapped[int] = mapped_column(Integer, nullable=True)
    extracted_text: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    summary_length: Mapped[str] = mapped_column(
        Enum(*SUMMARY_LENGTHS, name="summary_length"),
        default="medium",
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False, index=True
    )
