"""PDF parsing module using pypdf.

Extracts page-labelled text and metadata from PDF files with validation.
"""

import asyncio
import io
import logging

from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from zola.models.schemas import UploadedFile

logger = logging.getLogger(__name__)

# Constants
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
PDF_MAGIC_BYTES = b"%PDF"


class PDFContent(BaseModel):
    """Extracted content from a PDF file.

    Attributes:
        text: Page-labelled text ("Page N: ...") for every page.
        pages: Total number of pages in the document.
        metadata: Document metadata (title, author, etc.).
    """

    text: str
    pages: int = Field(ge=0)
    metadata: dict[str, str | None]


class PDFParseError(Exception):
    """Raised when PDF parsing fails."""

    pass


def _validate_pdf_bytes(file_content: bytes, max_size: int = MAX_FILE_SIZE) -> None:
    """Validate PDF file content before parsing.

    Args:
        file_content: Raw bytes of the PDF file.
        max_size: Largest accepted file, in bytes.

    Raises:
        PDFParseError: If validation fails.
    """
    if not file_content:
        raise PDFParseError("Empty file provided")

    if len(file_content) > max_size:
        size_mb = len(file_content) / (1024 * 1024)
        limit_mb = max_size / (1024 * 1024)
        raise PDFParseError(
            f"File size ({size_mb:.1f}MB) exceeds maximum allowed ({limit_mb:.0f}MB)"
        )

    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise PDFParseError("Invalid PDF: file does not start with PDF header")


def _extract_metadata(reader: PdfReader) -> dict[str, str | None]:
    """Extract metadata from PDF reader.

    Args:
        reader: Initialized PdfReader instance.

    Returns:
        Dictionary of metadata fields.
    """
    metadata: dict[str, str | None] = {}

    try:
        if reader.metadata:
            metadata["title"] = reader.metadata.get("/Title")
            metadata["author"] = reader.metadata.get("/Author")
            metadata["subject"] = reader.metadata.get("/Subject")
            metadata["creator"] = reader.metadata.get("/Creator")
            metadata["producer"] = reader.metadata.get("/Producer")
    except Exception as e:
        logger.warning(f"Failed to extract some metadata: {e}")

    return {k: str(v) for k, v in metadata.items() if v is not None}


def label_pages(page_texts: list[str]) -> str:
    """Join page texts, each prefixed with its 1-based "Page N:" label."""
    return "".join(f"Page {number}: {text}\n" for number, text in enumerate(page_texts, start=1))


def parse_pdf(file_content: bytes, max_size: int = MAX_FILE_SIZE) -> PDFContent:
    """Parse a PDF file and extract its page-labelled text.

    Args:
        file_content: Raw bytes of the PDF file.
        max_size: Largest accepted file, in bytes.

    Returns:
        PDFContent with extracted text, page count, and metadata.

    Raises:
        PDFParseError: If the file is invalid, too large, empty, or corrupt.
    """
    _validate_pdf_bytes(file_content, max_size)

    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = len(reader.pages)
    except PdfReadError as e:
        raise PDFParseError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise PDFParseError(f"Failed to read PDF: {e}") from e

    if pages == 0:
        raise PDFParseError("PDF contains no pages")

    page_texts: list[str] = []
    for i, page in enumerate(reader.pages):
        try:
            page_texts.append((page.extract_text() or "").strip())
        except Exception as e:
            logger.warning(f"Failed to extract text from page {i + 1}: {e}")
            page_texts.append("")

    if not any(page_texts):
        logger.warning("PDF contains no extractable text (may be scanned/image-based)")

    return PDFContent(
        text=label_pages(page_texts),
        pages=pages,
        metadata=_extract_metadata(reader),
    )


class PDFExtractor:
    """Turns uploaded PDF bytes into pending ``UploadedFile`` entries.

    Created once per process (see ``get_pdf_extractor``) and handed to each
    chat controller. Parsing is CPU-bound, so ``extract`` runs it in a worker
    thread to keep the event loop responsive.
    """

    def __init__(self, max_size: int = MAX_FILE_SIZE) -> None:
        self.max_size = max_size
        logger.info(f"PDF extractor ready (max {max_size // (1024 * 1024)}MB per file)")

    def extract_sync(self, name: str, data: bytes) -> UploadedFile:
        content = parse_pdf(data, self.max_size)
        meta = content.metadata
        logger.info(
            f"Extracted {name} ({content.pages} pages, "
            f"title={meta.get('title')!r}, author={meta.get('author')!r})"
        )
        return UploadedFile(name=name, content=content.text)

    async def extract(self, name: str, data: bytes) -> UploadedFile:
        """Extract page-labelled text from a PDF.

        Raises:
            PDFParseError: If the file cannot be parsed.
        """
        return await asyncio.to_thread(self.extract_sync, name, data)


# Module-level singleton instance
_pdf_extractor: PDFExtractor | None = None


def get_pdf_extractor() -> PDFExtractor:
    """Get or create the process-wide PDF extractor."""
    global _pdf_extractor
    if _pdf_extractor is None:
        _pdf_extractor = PDFExtractor()
    return _pdf_extractor
