"""Text extraction for ingestible file types."""

from dataclasses import dataclass
from pathlib import Path

import pdfplumber

from ..core.exceptions import IngestionError

TEXT_SUFFIXES = {".txt"}
PDF_SUFFIXES = {".pdf"}


@dataclass
class ExtractedText:
    """Text pulled out of one file."""

    text: str
    file_type: str
    page_count: int = 0


def extract_text_file(path: Path) -> ExtractedText:
    """Read a UTF-8 text file."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise IngestionError(f"Cannot read text file: {e}", str(path)) from e
    return ExtractedText(text=text, file_type="text")


def extract_pdf_file(path: Path) -> ExtractedText:
    """Extract the text layer of every page of a PDF."""
    try:
        with pdfplumber.open(str(path)) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
    except Exception as e:
        raise IngestionError(f"Cannot parse PDF file: {e}", str(path)) from e
    return ExtractedText(text="\n".join(pages), file_type="pdf", page_count=len(pages))


def extract(path: Path) -> ExtractedText:
    """Dispatch on the file suffix."""
    suffix = path.suffix.lower()
    if suffix in TEXT_SUFFIXES:
        return extract_text_file(path)
    if suffix in PDF_SUFFIXES:
        return extract_pdf_file(path)
    raise IngestionError(f"Unsupported file type: {suffix or '<none>'}", str(path))
