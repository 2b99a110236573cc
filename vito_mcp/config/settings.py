"""Configuration settings for Vito MCP."""

from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseType(str, Enum):
    """Supported vector database backends."""

    QDRANT = "qdrant"  # Networked vector-index service
    CHROMA = "chroma"  # Embedded (or HTTP) collection store


class Settings(BaseSettings):
    """Application settings with environment variable support.

    Settings are read once at startup and are immutable afterwards; pass
    overrides as keyword arguments instead of assigning attributes.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # General Configuration
    DEBUG: bool = Field(default=False, description="Debug mode")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FILE: Optional[Path] = Field(
        default=None, description="Optional log file path"
    )

    # Database Configuration
    DATABASE_TYPE: DatabaseType = Field(
        default=DatabaseType.QDRANT, description="Vector database backend: 'qdrant' or 'chroma'"
    )
    COLLECTION_NAME: str = Field(
        default="documents", description="Vector collection name"
    )
    VECTOR_SIZE: int = Field(
        default=768, description="Embedding vector dimensionality of the collection"
    )

    # Qdrant Configuration
    QDRANT_URL: str = Field(
        default="http://localhost:6333", description="Qdrant server URL"
    )
    QDRANT_API_KEY: Optional[str] = Field(
        default=None, description="Qdrant API key"
    )

    # Chroma Configuration
    CHROMA_URL: Optional[str] = Field(
        default=None, description="Chroma server URL (embedded persistent client when unset)"
    )
    CHROMA_PERSIST_DIRECTORY: Path = Field(
        default=Path("./data/chroma"), description="ChromaDB persistence directory"
    )

    # Embedding Configuration
    EMBEDDING_MODEL: str = Field(
        default="all-mpnet-base-v2", description="Embedding model name"
    )
    EMBEDDING_API_BASE: Optional[str] = Field(
        default=None, description="Embedding API base URL (e.g., http://localhost:4000)"
    )
    EMBEDDING_API_KEY: Optional[str] = Field(
        default=None, description="Embedding API key"
    )
    EMBEDDING_PROVIDER: str = Field(
        default="local", description="Embedding provider: 'local' or 'api'"
    )
    EMBEDDING_MAX_CHARS: int = Field(
        default=25000, description="Input is truncated to this many characters before embedding"
    )

    # Search Configuration
    DEFAULT_SEARCH_LIMIT: int = Field(
        default=3, description="Default number of search results"
    )
    DEFAULT_SCORE_THRESHOLD: float = Field(
        default=0.7, description="Default minimum similarity score"
    )

    # MCP Protocol Configuration
    MCP_SERVER_NAME: str = Field(
        default="vito-mcp", description="MCP server name"
    )
    MCP_SERVER_VERSION: str = Field(
        default="0.1.0", description="MCP server version"
    )

    @field_validator("DATABASE_TYPE", mode="before")
    @classmethod
    def normalize_database_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("VECTOR_SIZE", "DEFAULT_SEARCH_LIMIT", "EMBEDDING_MAX_CHARS")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be a positive integer")
        return v

    @field_validator("DEFAULT_SCORE_THRESHOLD")
    @classmethod
    def threshold_in_range(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("must be between 0.0 and 1.0")
        return v

    def create_directories(self) -> None:
        """Create necessary directories."""
        if self.DATABASE_TYPE == DatabaseType.CHROMA and not self.CHROMA_URL:
            self.CHROMA_PERSIST_DIRECTORY.mkdir(parents=True, exist_ok=True)
        if self.LOG_FILE:
            self.LOG_FILE.parent.mkdir(parents=True, exist_ok=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary with secrets masked."""
        data = self.model_dump()
        for key in ("QDRANT_API_KEY", "EMBEDDING_API_KEY"):
            if data.get(key):
                data[key] = "***"
        return data

    def __repr__(self) -> str:
        """String representation of settings."""
        return (
            f"Settings(database={self.DATABASE_TYPE.value}, "
            f"collection={self.COLLECTION_NAME}, vector_size={self.VECTOR_SIZE})"
        )
