"""Collaborator dependencies for the request handlers.

Each external collaborator (PDF extraction, LLM completion, summary store) is
a process-wide handle exposed through a FastAPI dependency, so tests can swap
any of them via ``app.dependency_overrides``.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from summarize_ai.core.database import get_db
from summarize_ai.services.pdf_service import PDFService, pdf_service
from summarize_ai.services.summarization_service import (
    SummarizationService,
    summarization_service,
)
from summarize_ai.services.summary_store import SummaryStore


def get_pdf_service() -> PDFService:
    return pdf_service


def get_summarization_service() -> SummarizationService:
    return summarization_service


async def get_summary_store(db: AsyncSession = Depends(get_db)) -> SummaryStore:
    return SummaryStore(db)
