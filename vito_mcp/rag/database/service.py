"""Database service: one backend-agnostic entry point over the vector stores."""

from typing import Any, Dict, List, Optional, Type

from ...config.logging import LoggerMixin
from ...config.settings import DatabaseType, Settings
from ...core.exceptions import ConfigurationError, DatabaseError, SearchError
from ...models.rag import DocumentEntry, QueryResult, stamp_metadata
from ...utils.validation import (
    validate_domain,
    validate_limit,
    validate_metadata,
    validate_score_threshold,
    validate_search_query,
    validate_text,
)
from ..embeddings import EmbeddingManager
from .base import VectorBackend
from .chroma import ChromaBackend
from .qdrant import QdrantBackend

BACKENDS: Dict[DatabaseType, Type[VectorBackend]] = {
    DatabaseType.QDRANT: QdrantBackend,
    DatabaseType.CHROMA: ChromaBackend,
}

_UNSET: Any = object()


class DatabaseService(LoggerMixin):
    """Stores and searches domain knowledge on the configured backend.

    The backend adapter is chosen once, from ``settings.DATABASE_TYPE``, and
    held for the lifetime of the service. Results from either backend come
    back as ``QueryResult`` objects sorted by descending score.

    Search failures at the backend are logged and reported as an empty list
    unless ``raise_on_error=True`` is passed, in which case ``SearchError``
    propagates. Initialization and store failures always propagate.
    """

    def __init__(
        self,
        settings: Settings,
        embedding_manager: Optional[EmbeddingManager] = None,
        backend: Optional[VectorBackend] = None,
    ) -> None:
        self.settings = settings
        self.embedding_manager = embedding_manager or EmbeddingManager(settings)
        self.backend = backend or self._create_backend()

        self.logger.info("Using database type", db_type=self.backend.name)

    def _create_backend(self) -> VectorBackend:
        backend_cls = BACKENDS.get(self.settings.DATABASE_TYPE)
        if backend_cls is None:
            raise ConfigurationError(
                f"Unsupported database type: {self.settings.DATABASE_TYPE}", "DATABASE_TYPE"
            )
        return backend_cls(self.settings, self.embedding_manager)

    def get_db_type(self) -> DatabaseType:
        """Return the configured backend identifier."""
        return self.backend.db_type

    @property
    def collection_name(self) -> str:
        return self.backend.collection_name

    async def initialize(self) -> None:
        """Ensure the embedding provider is ready and the collection exists.

        Safe to call repeatedly; an existing collection is never recreated.
        """
        if not self.embedding_manager.is_initialized:
            await self.embedding_manager.initialize()

        await self.backend.ensure_collection()
        self.logger.info(
            "Database service initialized",
            db_type=self.backend.name,
            collection=self.collection_name,
        )

    async def close(self) -> None:
        """Release backend and embedding resources."""
        await self.backend.close()
        await self.embedding_manager.close()
        self.logger.info("Database service closed")

    async def search(
        self,
        query: str,
        limit: Optional[int] = None,
        score_threshold: Optional[float] = _UNSET,
        raise_on_error: bool = False,
    ) -> List[QueryResult]:
        """Find stored documents semantically similar to ``query``.

        Args:
            query: Free text to search for; embedded once per call.
            limit: Maximum number of results (defaults to DEFAULT_SEARCH_LIMIT).
            score_threshold: Minimum score; ``None`` disables the cutoff.
                Defaults to DEFAULT_SCORE_THRESHOLD.
            raise_on_error: Re-raise backend search failures instead of
                returning an empty list.

        Returns:
            At most ``limit`` results, most similar first.
        """
        limit = self.settings.DEFAULT_SEARCH_LIMIT if limit is None else limit
        if score_threshold is _UNSET:
            score_threshold = self.settings.DEFAULT_SCORE_THRESHOLD

        validate_search_query(query)
        validate_limit(limit)
        validate_score_threshold(score_threshold)

        # Fail on a missing client before spending an embedding call
        self.backend.require_initialized("search")

        query_vector = await self.embedding_manager.embed_text(query)

        try:
            results = await self.backend.search(query_vector, limit, score_threshold)
        except SearchError as e:
            self.logger.error(
                "Search failed",
                db_type=self.backend.name,
                collection=self.collection_name,
                error=str(e),
            )
            if raise_on_error:
                raise
            return []

        results = sorted(results, key=lambda r: r.score, reverse=True)[:limit]
        self.logger.info("Search completed", query=query, results=len(results))
        return results

    async def store_domain_knowledge(
        self,
        text: str,
        domain: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Embed and store one document, returning the id it was stored under."""
        validate_text(text)
        validate_domain(domain)
        validate_metadata(metadata)

        self.backend.require_initialized("store")

        vector = await self.embedding_manager.embed_text(text)
        entry = DocumentEntry(
            text=text,
            vector=vector,
            metadata=stamp_metadata(domain, metadata),
        )
        if entry.dimension != self.settings.VECTOR_SIZE:
            raise DatabaseError(
                f"Embedding has {entry.dimension} dimensions, collection expects {self.settings.VECTOR_SIZE}",
                self.backend.name,
                "store",
            )

        await self.backend.store(entry)

        self.logger.info(
            "Domain knowledge stored",
            document_id=entry.id,
            domain=domain,
            db_type=self.backend.name,
        )
        return entry.id
