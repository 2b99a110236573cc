"""Vito MCP domain models."""

from .base import IdentifiedModel, VitoBaseModel, utc_now
from .ingest import IngestionReport
from .rag import (
    DOMAIN_KNOWLEDGE_TYPE,
    METADATA_SCHEMA_VERSION,
    DocumentEntry,
    QueryResult,
    stamp_metadata,
)

__all__ = [
    # Base models
    "VitoBaseModel",
    "IdentifiedModel",
    "utc_now",

    # RAG models
    "DocumentEntry",
    "QueryResult",
    "stamp_metadata",
    "DOMAIN_KNOWLEDGE_TYPE",
    "METADATA_SCHEMA_VERSION",

    # Ingestion models
    "IngestionReport",
]
