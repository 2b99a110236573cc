"""Custom exceptions for Vito MCP."""

from typing import Any, Dict, Optional


class VitoError(Exception):
    """Base exception for all Vito MCP errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [self.message]
        if self.error_code:
            parts.append(f"(code: {self.error_code})")
        return " ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "error": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class ConfigurationError(VitoError):
    """Raised when there's a configuration issue."""

    def __init__(self, message: str, config_key: Optional[str] = None) -> None:
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, "CONFIGURATION_ERROR", details)


class DatabaseError(VitoError):
    """Raised when a vector database operation fails."""

    def __init__(
        self,
        message: str,
        backend: Optional[str] = None,
        operation: Optional[str] = None,
    ) -> None:
        details = {}
        if backend:
            details["backend"] = backend
        if operation:
            details["operation"] = operation
        super().__init__(message, "DATABASE_ERROR", details)


class DatabaseNotInitializedError(DatabaseError):
    """Raised when the database is used before initialize() completed."""

    def __init__(self, backend: str, operation: Optional[str] = None) -> None:
        super().__init__(f"{backend} backend not initialized", backend, operation)
        self.error_code = "DATABASE_NOT_INITIALIZED"


class SearchError(DatabaseError):
    """Raised when a similarity search fails at the backend."""

    def __init__(self, message: str, backend: Optional[str] = None) -> None:
        super().__init__(message, backend, "search")
        self.error_code = "SEARCH_ERROR"


class EmbeddingError(VitoError):
    """Raised when there's an embedding generation issue."""

    def __init__(self, message: str, provider: Optional[str] = None) -> None:
        details = {"provider": provider} if provider else {}
        super().__init__(message, "EMBEDDING_ERROR", details)


class ValidationError(VitoError):
    """Raised when data validation fails."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class IngestionError(VitoError):
    """Raised when documents cannot be read for ingestion."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        details = {"path": path} if path else {}
        super().__init__(message, "INGESTION_ERROR", details)
