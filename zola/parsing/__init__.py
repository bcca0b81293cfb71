"""PDF parsing utilities for prompt augmentation.

Responsibilities:
    - PDF validation (size, header) and text extraction with pypdf
    - "Page N:" labelling of each page's text
    - Metadata extraction (title, author)
    - A shared extractor service used by every chat session
"""

from zola.parsing.pdf_parser import (
    PDFContent,
    PDFExtractor,
    PDFParseError,
    get_pdf_extractor,
    parse_pdf,
)

__all__ = ["PDFContent", "PDFExtractor", "PDFParseError", "get_pdf_extractor", "parse_pdf"]
