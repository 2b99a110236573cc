"""File ingestion into the vector store."""

from .extractors import ExtractedText, extract
from .uploader import DocumentUploader

__all__ = ["DocumentUploader", "ExtractedText", "extract"]
