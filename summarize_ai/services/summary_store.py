"""Persistence for summary records."""

import uuid
from typing import List, Optional, Union

from sqlalchemy import delete, select
from sqlalchemy.orm import defer
from sqlalchemy.ext.asyncio import AsyncSession

from summarize_ai.core.config import settings
from summarize_ai.core.logging import logger
from summarize_ai.models.summary import SummaryRecord


def _parse_id(record_id: Union[str, uuid.UUID]) -> Optional[uuid.UUID]:
    if isinstance(record_id, uuid.UUID):
        return record_id
    try:
        return uuid.UUID(str(record_id))
    except ValueError:
        return None


class SummaryStore:
    """Insert, list, fetch and delete summaries within one session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(
        self,
        *,
        original_filename: str,
        file_size: int,
        page_count: Optional[int],
        extracted_text: str,
        summary: str,
        summary_length: str,
    ) -> SummaryRecord:
        """Create a record and commit it so id and created_at are final."""
        record = SummaryRecord(
            original_filename=original_filename,
            file_size=file_size,
            page_count=page_count,
            extracted_text=extracted_text[: settings.STORED_TEXT_LIMIT],
            summary=summary,
            summary_length=summary_length,
        )
        self.db.add(record)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        await self.db.refresh(record)
        return record

    async def list_recent(self, limit: Optional[int] = None) -> List[SummaryRecord]:
        """Newest first, capped at the history limit."""
        limit = min(limit or settings.HISTORY_LIMIT, settings.HISTORY_LIMIT)
        result = await self.db.execute(
            select(SummaryRecord)
            .options(defer(SummaryRecord.extracted_text))
            .order_by(SummaryRecord.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get(self, record_id: Union[str, uuid.UUID]) -> Optional[SummaryRecord]:
        parsed = _parse_id(record_id)
        if parsed is None:
            return None
        result = await self.db.execute(
            select(SummaryRecord).where(SummaryRecord.id == parsed)
        )
        return result.scalar_one_or_none()

    async def delete(self, record_id: Union[str, uuid.UUID]) -> None:
        """Delete by id. Unknown or malformed ids are a no-op."""
        parsed = _parse_id(record_id)
        if parsed is None:
            logger.debug(f"Ignoring delete for malformed id: {record_id!r}")
            return
        await self.db.execute(delete(SummaryRecord).where(SummaryRecord.id == parsed))
        await self.db.commit()
