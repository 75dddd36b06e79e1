"""
Service Tests: PDF extraction, LLM completion and the summary store
"""
import json
import uuid

import httpx
import pytest
from sqlalchemy import inspect

from summarize_ai.core.config import settings
from summarize_ai.schemas import SummaryLength
from summarize_ai.services.pdf_service import PDFExtractionError, PDFService
from summarize_ai.services.summarization_service import (
    EMPTY_SUMMARY_FALLBACK,
    TRUNCATION_MARKER,
    CompletionError,
    SummarizationService,
)
from summarize_ai.services.summary_store import SummaryStore
from tests.conftest import make_pdf


def completion(content="A summary.", status_code=200, sent=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if sent is not None:
            sent.append((request, json.loads(request.content)))
        if status_code != 200:
            return httpx.Response(status_code, text="upstream unavailable")
        return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})

    return SummarizationService(transport=httpx.MockTransport(handler))


class TestPDFService:
    """Test text extraction with PyMuPDF"""

    def test_extract_text_and_pages(self):
        doc = PDFService().extract(make_pdf("First page text", "Second page text", ""))
        assert doc.page_count == 3
        assert "First page text" in doc.text
        assert "Second page text" in doc.text

    def test_blank_pdf_has_no_text(self):
        doc = PDFService().extract(make_pdf(""))
        assert doc.page_count == 1
        assert doc.text.strip() == ""

    def test_garbage_raises(self):
        with pytest.raises(PDFExtractionError):
            PDFService().extract(b"this is not a pdf at all")

    def test_looks_like_pdf(self):
        assert PDFService.looks_like_pdf(make_pdf("x"))
        assert PDFService.looks_like_pdf(b"\n\n%PDF-1.4 ...")
        assert not PDFService.looks_like_pdf(b"PK\x03\x04 zip archive")
        assert not PDFService.looks_like_pdf(b"")


class TestPromptConstruction:
    """Test prompt text and instructions"""

    def test_short_text_unchanged(self):
        assert SummarizationService.prepare_text("hello") == "hello"

    def test_exact_limit_unchanged(self):
        text = "a" * 12000
        assert SummarizationService.prepare_text(text) == text

    def test_long_text_cut_with_marker(self):
        text = "a" * 12000 + "b" * 500
        prepared = SummarizationService.prepare_text(text)
        assert prepared == "a" * 12000 + TRUNCATION_MARKER
        assert "b" not in prepared

    @pytest.mark.parametrize(
        "length, phrase",
        [
            (SummaryLength.SHORT, "2-3 sentences"),
            (SummaryLength.MEDIUM, "1-2 paragraphs"),
            (SummaryLength.LONG, "bullet points and sections"),
        ],
    )
    def test_system_prompt_by_length(self, length, phrase):
        prompt = SummarizationService.system_prompt(length)
        assert phrase in prompt
        assert prompt.startswith("You are an expert document summarizer.")
        assert prompt.endswith("Format your response in markdown.")


class TestSummarizationService:
    """Test the completion call"""

    async def test_payload(self):
        sent = []
        summary = await completion("  **Key points**  ", sent=sent).summarize(
            "Document body", SummaryLength.SHORT
        )
        assert summary == "**Key points**"

        request, payload = sent[0]
        assert str(request.url) == "https://api.groq.com/openai/v1/chat/completions"
        assert request.headers["Authorization"] == f"Bearer {settings.GROQ_API_KEY}"
        assert payload["model"] == "llama-3.1-8b-instant"
        assert payload["temperature"] == 0.3
        assert payload["max_tokens"] == 2048
        assert payload["messages"][0]["role"] == "system"
        assert "2-3 sentences" in payload["messages"][0]["content"]
        assert payload["messages"][1]["content"].endswith("Document body")

    async def test_single_call_no_retry(self):
        sent = []
        with pytest.raises(CompletionError):
            await completion(status_code=429, sent=sent).summarize("text")
        assert len(sent) == 1

    async def test_empty_content_fallback(self):
        assert await completion("").summarize("text") == EMPTY_SUMMARY_FALLBACK

    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        service = SummarizationService(transport=httpx.MockTransport(handler))
        with pytest.raises(CompletionError):
            await service.summarize("text")

    async def test_missing_api_key(self, monkeypatch):
        monkeypatch.setattr(settings, "GROQ_API_KEY", None)
        with pytest.raises(ValueError, match="GROQ_API_KEY"):
            await completion().summarize("text")

    async def test_unknown_platform(self):
        with pytest.raises(ValueError, match="Unknown platform"):
            await completion().summarize("text", platform="nowhere")


class TestSummaryLength:
    """Test length mode parsing"""

    @pytest.mark.parametrize("raw, expected", [
        ("short", "short"), ("LONG", "long"), (" medium ", "medium"),
        (None, "medium"), ("", "medium"), ("tiny", "medium"),
    ])
    def test_normalize(self, raw, expected):
        assert SummaryLength.normalize(raw).value == expected

    def test_labels(self):
        assert SummaryLength.SHORT.label == "Brief"
        assert SummaryLength.MEDIUM.label == "Standard"
        assert SummaryLength.LONG.label == "Detailed"


class TestSummaryStore:
    """Test the persistence collaborator"""

    async def _insert(self, store, **overrides):
        fields = dict(
            original_filename="a.pdf",
            file_size=10,
            page_count=None,
            extracted_text="text",
            summary="sum",
            summary_length="short",
        )
        fields.update(overrides)
        return await store.insert(**fields)

    async def test_insert_assigns_id_and_timestamp(self, session_factory):
        async with session_factory() as session:
            record = await self._insert(SummaryStore(session))
            assert isinstance(record.id, uuid.UUID)
            assert record.created_at is not None
            assert record.page_count is None

    async def test_insert_caps_extracted_text(self, session_factory):
        async with session_factory() as session:
            record = await self._insert(SummaryStore(session), extracted_text="z" * 70000)
            assert len(record.extracted_text) == 50000

    async def test_get_and_delete(self, session_factory):
        async with session_factory() as session:
            store = SummaryStore(session)
            record = await self._insert(store)
            assert (await store.get(str(record.id))).id == record.id

            await store.delete(str(record.id))
            assert await store.get(record.id) is None

    async def test_malformed_ids(self, session_factory):
        async with session_factory() as session:
            store = SummaryStore(session)
            assert await store.get("nope") is None
            await store.delete("nope")

    async def test_list_limit_is_capped(self, session_factory):
        async with session_factory() as session:
            store = SummaryStore(session)
            for i in range(3):
                await self._insert(store, original_filename=f"{i}.pdf")
            assert len(await store.list_recent(limit=2)) == 2
            assert len(await store.list_recent(limit=500)) == 3

    async def test_list_skips_extracted_text(self, session_factory):
        async with session_factory() as session:
            await self._insert(SummaryStore(session), extracted_text="x" * 40000)

        async with session_factory() as session:
            (row,) = await SummaryStore(session).list_recent()
            assert "extracted_text" in inspect(row).unloaded
            assert row.summary == "sum"
