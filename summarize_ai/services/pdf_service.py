"""PDF text extraction service."""

from dataclasses import dataclass
from typing import Optional

import fitz  # PyMuPDF

PDF_MAGIC = b"%PDF-"
# PDF readers accept the header anywhere in the first KB
HEADER_SEARCH_WINDOW = 1024


class PDFExtractionError(Exception):
    """Raised when a PDF cannot be opened or parsed."""


@dataclass
class ExtractedDocument:
    text: str
    page_count: Optional[int]


class PDFService:
    """Service for turning uploaded PDF bytes into plain text."""

    @staticmethod
    def looks_like_pdf(content: bytes) -> bool:
        """Check for the PDF header near the start of the payload."""
        return PDF_MAGIC in content[:HEADER_SEARCH_WINDOW]

    def extract(self, pdf_content: bytes) -> ExtractedDocument:
        """Extract all text from a PDF file along with its page count."""
        text_parts = []

        try:
            with fitz.open(stream=pdf_content, filetype="pdf") as doc:
                page_count = doc.page_count
                for page in doc:
                    page_text = page.get_text().replace("\x00", "")
                    if page_text.strip():
                        text_parts.append(page_text)
        except (RuntimeError, ValueError) as e:
            # fitz.FileDataError / EmptyFileError are RuntimeError subclasses
            raise PDFExtractionError(f"Could not read PDF: {e}") from e

        return ExtractedDocument(text="\n\n".join(text_parts), page_count=page_count)


# Singleton instance
pdf_service = PDFService()
