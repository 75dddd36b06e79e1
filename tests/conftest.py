"""
Test Configuration and Fixtures
"""
import os

# Must be set before summarize_ai reads its settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["GROQ_API_KEY"] = "test-groq-key"
os.environ["DEFAULT_LLM_PLATFORM"] = "groq"

import fitz
import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from summarize_ai.core.database import Base, get_db
from summarize_ai.dependencies import get_pdf_service, get_summarization_service
from summarize_ai.main import app
from summarize_ai.schemas import SummaryLength
from summarize_ai.services.pdf_service import ExtractedDocument, PDFService


def make_pdf(*pages: str) -> bytes:
    """Build a real PDF with one page per argument (empty string = blank page)."""
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        for i, line in enumerate(text.splitlines()):
            page.insert_text((72, 72 + 14 * i), line)
    data = doc.tobytes()
    doc.close()
    return data


class FakeSummarizer:
    """Stands in for the LLM; records what it was asked."""

    def __init__(self, summary="This document explains things. It is short.", error=None):
        self.summary = summary
        self.error = error
        self.calls = []

    async def summarize(self, text, length=SummaryLength.MEDIUM, platform=None):
        self.calls.append((text, length))
        if self.error:
            raise self.error
        return self.summary


class FakePDFService(PDFService):
    """Returns canned text for any payload that passes the header check."""

    def __init__(self, text, page_count=1):
        self.text = text
        self.page_count = page_count

    def extract(self, pdf_content):
        return ExtractedDocument(text=self.text, page_count=self.page_count)


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    import summarize_ai.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def summarizer():
    return FakeSummarizer()


@pytest.fixture
def test_app(session_factory, summarizer):
    """The application wired to the in-memory database and a fake LLM."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_summarization_service] = lambda: summarizer
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def use_pdf_service(test_app):
    """Swap the extraction collaborator for a canned one."""

    def _use(service):
        test_app.dependency_overrides[get_pdf_service] = lambda: service
        return service

    return _use


@pytest.fixture
async def client(test_app):
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
