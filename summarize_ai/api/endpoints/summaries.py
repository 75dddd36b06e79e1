"""PDF summarization and summary history endpoints."""

import traceback
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool

from summarize_ai.core.config import settings
from summarize_ai.core.logging import logger
from summarize_ai.dependencies import (
    get_pdf_service,
    get_summarization_service,
    get_summary_store,
)
from summarize_ai.schemas import (
    MessageResponse,
    SummarizeResponse,
    SummaryDetail,
    SummaryLength,
    SummaryListItem,
)
from summarize_ai.services.pdf_service import PDFExtractionError, PDFService
from summarize_ai.services.summarization_service import (
    CompletionError,
    SummarizationService,
)
from summarize_ai.services.summary_store import SummaryStore

router = APIRouter()

PDF_CONTENT_TYPES = ("application/pdf", "application/x-pdf")
NO_TEXT_MESSAGE = "Could not extract text from PDF. The file may be image-based or empty."


def _is_pdf_upload(file: UploadFile) -> bool:
    """Accept PDF content types, or a generic binary upload named *.pdf."""
    if file.content_type in PDF_CONTENT_TYPES:
        return True
    return (
        file.content_type == "application/octet-stream"
        and (file.filename or "").lower().endswith(".pdf")
    )


def _log_traceback() -> None:
    if settings.DEBUG:
        logger.error(f"Traceback:\n{traceback.format_exc()}")


@router.post("/summarize", response_model=SummarizeResponse)
async def summarize_pdf(
    pdf: Optional[UploadFile] = File(None),
    length: Optional[str] = Form(None),
    pdf_service: PDFService = Depends(get_pdf_service),
    summarizer: SummarizationService = Depends(get_summarization_service),
    store: SummaryStore = Depends(get_summary_store),
):
    """
    Upload a PDF file and get an AI-generated summary.

    - Extracts text from the PDF
    - Sends the (possibly truncated) text to the LLM once
    - Stores the result in the summary history (best effort)
    - Returns the summary
    """
    if pdf is None or not pdf.filename:
        raise HTTPException(status_code=400, detail="No PDF file uploaded")

    if not _is_pdf_upload(pdf):
        raise HTTPException(status_code=400, detail="Only PDF files are allowed")

    summary_length = SummaryLength.normalize(length)
    too_large = HTTPException(
        status_code=400,
        detail=f"File too large. Max {settings.MAX_UPLOAD_MB}MB.",
    )

    if pdf.size is not None and pdf.size > settings.max_upload_bytes:
        raise too_large

    # One byte past the limit is enough to know the upload is oversized
    content = await pdf.read(settings.max_upload_bytes + 1)

    if len(content) == 0:
        raise HTTPException(status_code=400, detail="Empty file uploaded")

    if len(content) > settings.max_upload_bytes:
        raise too_large

    if not pdf_service.looks_like_pdf(content):
        raise HTTPException(status_code=400, detail="Only PDF files are allowed")

    logger.info(f"Summarizing PDF: {pdf.filename} ({len(content)} bytes, {summary_length.value})")

    # Step 1: Extract text
    try:
        document = await run_in_threadpool(pdf_service.extract, content)
    except PDFExtractionError as e:
        logger.error(f"PDF extraction failed for '{pdf.filename}': {e}")
        _log_traceback()
        raise HTTPException(status_code=500, detail="Failed to process PDF")

    if not document.text.strip():
        raise HTTPException(status_code=400, detail=NO_TEXT_MESSAGE)

    logger.info(
        f"Extracted {len(document.text)} chars from {document.page_count} page(s), sending to LLM..."
    )

    # Step 2: Summarize
    try:
        summary = await summarizer.summarize(document.text, length=summary_length)
    except ValueError as e:
        # Missing API key / unknown platform
        raise HTTPException(status_code=500, detail=str(e))
    except CompletionError as e:
        logger.error(f"PDF summarization failed for '{pdf.filename}': {e}")
        _log_traceback()
        raise HTTPException(
            status_code=500,
            detail="Error summarizing PDF. Check server logs for details.",
        )

    # Step 3: Persist (best effort; the caller still gets the summary)
    record = None
    try:
        record = await store.insert(
            original_filename=pdf.filename,
            file_size=len(content),
            page_count=document.page_count,
            extracted_text=document.text,
            summary=summary,
            summary_length=summary_length.value,
        )
    except Exception as e:
        logger.error(f"Failed to store summary for '{pdf.filename}': {e}")
        _log_traceback()

    if record is not None:
        logger.info(f"PDF summarized successfully, stored as {record.id}")

    return SummarizeResponse(
        id=record.id if record else None,
        filename=pdf.filename,
        page_count=document.page_count,
        text_length=len(document.text),
        summary=summary,
        summary_length=summary_length,
        created_at=record.created_at if record else datetime.utcnow(),
    )


@router.get("/summaries", response_model=List[SummaryListItem])
async def list_summaries(store: SummaryStore = Depends(get_summary_store)):
    """List the most recent summaries, newest first."""
    try:
        return await store.list_recent()
    except Exception as e:
        logger.error(f"Fetch summaries failed: {e}")
        _log_traceback()
        raise HTTPException(status_code=500, detail="Failed to fetch summaries")


@router.get("/summaries/{summary_id}", response_model=SummaryDetail)
async def get_summary(summary_id: str, store: SummaryStore = Depends(get_summary_store)):
    """Get a single summary including its extracted text."""
    try:
        record = await store.get(summary_id)
    except Exception as e:
        logger.error(f"Fetch summary {summary_id} failed: {e}")
        _log_traceback()
        raise HTTPException(status_code=500, detail="Failed to fetch summary")

    if not record:
        raise HTTPException(status_code=404, detail="Summary not found")
    return record


@router.delete("/summaries/{summary_id}", response_model=MessageResponse)
async def delete_summary(summary_id: str, store: SummaryStore = Depends(get_summary_store)):
    """Delete a summary. Unknown ids are a no-op."""
    try:
        await store.delete(summary_id)
    except Exception as e:
        logger.error(f"Delete summary {summary_id} failed: {e}")
        _log_traceback()
        raise HTTPException(status_code=500, detail="Failed to delete summary")

    logger.info(f"Summary deleted: {summary_id}")
    return {"message": "Summary deleted"}
