"""Core server functionality for Vito MCP."""

from .server import VitoServer
from .exceptions import (
    ConfigurationError,
    DatabaseError,
    DatabaseNotInitializedError,
    EmbeddingError,
    IngestionError,
    SearchError,
    ValidationError,
    VitoError,
)

__all__ = [
    "VitoServer",
    "VitoError",
    "ConfigurationError",
    "DatabaseError",
    "DatabaseNotInitializedError",
    "EmbeddingError",
    "IngestionError",
    "SearchError",
    "ValidationError",
]
