"""Backend adapter interface for vector databases."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ...config.logging import LoggerMixin
from ...config.settings import DatabaseType, Settings
from ...core.exceptions import DatabaseNotInitializedError
from ...models.rag import DocumentEntry, QueryResult
from ..embeddings import EmbeddingManager


class VectorBackend(ABC, LoggerMixin):
    """Capability set shared by every vector database backend.

    Adapters own the backend client, keep the collection handle after
    ``ensure_collection`` and return ``QueryResult`` objects whose score is
    already oriented so that higher means more similar.
    """

    db_type: DatabaseType

    def __init__(self, settings: Settings, embedding_manager: EmbeddingManager):
        self.settings = settings
        self.embedding_manager = embedding_manager
        self.collection_name = settings.COLLECTION_NAME

    @property
    def name(self) -> str:
        return self.db_type.value

    @property
    @abstractmethod
    def is_initialized(self) -> bool:
        """Whether a client handle is available for search and store."""
        pass

    @abstractmethod
    async def ensure_collection(self) -> None:
        """Create the configured collection if it does not exist yet."""
        pass

    @abstractmethod
    async def search(
        self,
        vector: List[float],
        limit: int,
        score_threshold: Optional[float] = None,
    ) -> List[QueryResult]:
        """Return the nearest entries to ``vector``, most similar first.

        Raises SearchError when the backend call fails.
        """
        pass

    @abstractmethod
    async def store(self, entry: DocumentEntry) -> None:
        """Write one entry under ``entry.id``."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the backend client."""
        pass

    def require_initialized(self, operation: str) -> None:
        """Raise DatabaseNotInitializedError when no client handle is available."""
        if not self.is_initialized:
            raise DatabaseNotInitializedError(self.name, operation)
