"""Chroma backend: embedded (or HTTP) collection store."""

import asyncio
from functools import partial
from typing import Any, Callable, List, Optional, TypeVar
from urllib.parse import urlparse

import chromadb
import numpy as np
from chromadb.api.types import Documents, EmbeddingFunction, Embeddings
from chromadb.config import Settings as ChromaSettings

from ...config.settings import DatabaseType, Settings
from ...core.exceptions import DatabaseError, EmbeddingError, SearchError
from ...models.rag import DocumentEntry, QueryResult
from ..embeddings import EmbeddingManager
from .base import VectorBackend

T = TypeVar("T")

COLLECTION_METADATA = {
    "description": "Vito MCP collection",
    # Keeps distances in the range where 1 - distance is a similarity
    "hnsw:space": "cosine",
}


class ChromaEmbeddingFunction(EmbeddingFunction[Documents]):
    """Chroma embedding function backed by the async EmbeddingManager.

    Chroma calls embedding functions synchronously, so the coroutine is
    scheduled on the event loop the backend was initialized on. It must be
    invoked from a worker thread, never from the loop thread itself.
    """

    def __init__(
        self,
        embedding_manager: EmbeddingManager,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self.embedding_manager = embedding_manager
        self._loop = loop

    @staticmethod
    def name() -> str:
        return "vito-mcp-embedding-manager"

    def bind_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop

    def __call__(self, input: Documents) -> Embeddings:
        if self._loop is None or not self._loop.is_running():
            raise EmbeddingError("Chroma embedding function has no running event loop")

        try:
            current = asyncio.get_running_loop()
        except RuntimeError:
            current = None
        if current is self._loop:
            raise EmbeddingError("Chroma embedding function called on the event loop thread")

        future = asyncio.run_coroutine_threadsafe(
            self.embedding_manager.embed_texts(list(input)), self._loop
        )
        vectors = future.result()
        return [np.asarray(vector, dtype=np.float32) for vector in vectors]


class ChromaBackend(VectorBackend):
    """Stores documents in a Chroma collection bound to ChromaEmbeddingFunction."""

    db_type = DatabaseType.CHROMA

    def __init__(
        self,
        settings: Settings,
        embedding_manager: EmbeddingManager,
        client: Optional[Any] = None,
    ):
        super().__init__(settings, embedding_manager)
        self.client = client
        self.collection = None
        self.embedding_function = ChromaEmbeddingFunction(embedding_manager)

    @property
    def is_initialized(self) -> bool:
        return self.collection is not None

    def _create_client(self):
        chroma_settings = ChromaSettings(anonymized_telemetry=False)

        if self.settings.CHROMA_URL:
            parsed = urlparse(self.settings.CHROMA_URL)
            ssl = parsed.scheme == "https"
            return chromadb.HttpClient(
                host=parsed.hostname or "localhost",
                port=parsed.port or (443 if ssl else 8000),
                ssl=ssl,
                settings=chroma_settings,
            )

        self.settings.CHROMA_PERSIST_DIRECTORY.mkdir(parents=True, exist_ok=True)
        return chromadb.PersistentClient(
            path=str(self.settings.CHROMA_PERSIST_DIRECTORY),
            settings=chroma_settings,
        )

    async def _run(self, func: Callable[..., T], *args, **kwargs) -> T:
        """Run a blocking chromadb call in the default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(func, *args, **kwargs))

    async def ensure_collection(self) -> None:
        """Create the collection if absent, otherwise fetch its handle."""
        self.embedding_function.bind_loop(asyncio.get_running_loop())

        try:
            if self.client is None:
                self.client = await self._run(self._create_client)

            collections = await self._run(self.client.list_collections)
            # Older clients list names, newer ones list Collection objects
            names = {getattr(c, "name", c) for c in collections}

            if self.collection_name not in names:
                self.logger.info("Creating Chroma collection", collection=self.collection_name)
                self.collection = await self._run(
                    self.client.create_collection,
                    name=self.collection_name,
                    metadata=COLLECTION_METADATA,
                    embedding_function=self.embedding_function,
                )
                self.logger.info("Chroma collection created", collection=self.collection_name)
            else:
                self.logger.info("Chroma collection already exists", collection=self.collection_name)
                self.collection = await self._run(
                    self.client.get_collection,
                    name=self.collection_name,
                    embedding_function=self.embedding_function,
                )

        except Exception as e:
            self.logger.error(
                "Error ensuring Chroma collection exists",
                collection=self.collection_name,
                error=str(e),
            )
            raise DatabaseError(
                f"Failed to ensure Chroma collection {self.collection_name}: {e}",
                self.name,
                "ensure_collection",
            ) from e

    async def search(
        self,
        vector: List[float],
        limit: int,
        score_threshold: Optional[float] = None,
    ) -> List[QueryResult]:
        """Query with a precomputed vector; the score cutoff is applied here."""
        self.require_initialized("search")

        try:
            results = await self._run(
                self.collection.query,
                query_embeddings=[vector],
                n_results=limit,
                include=["documents", "metadatas", "distances"],
            )
        except Exception as e:
            raise SearchError(
                f"Error searching Chroma collection {self.collection_name}: {e}", self.name
            ) from e

        return self._format_results(results, score_threshold)

    @staticmethod
    def _first(results: Any, key: str) -> List[Any]:
        """Rows of the single query in a batch-of-one response."""
        batches = results.get(key) or []
        return list(batches[0] or []) if batches else []

    def _format_results(
        self,
        results: Any,
        score_threshold: Optional[float],
    ) -> List[QueryResult]:
        documents = self._first(results, "documents")
        metadatas = self._first(results, "metadatas")
        distances = self._first(results, "distances")

        formatted = []
        for i, document in enumerate(documents):
            distance = distances[i] if i < len(distances) and distances[i] is not None else 0.0
            score = 1.0 - float(distance)
            if score_threshold is not None and score < score_threshold:
                continue

            metadata = metadatas[i] if i < len(metadatas) and isinstance(metadatas[i], dict) else {}
            formatted.append(QueryResult.from_native(document, metadata, score))
        return formatted

    async def store(self, entry: DocumentEntry) -> None:
        """Add one item; without a vector Chroma embeds via the bound function."""
        self.require_initialized("store")

        kwargs = {
            "ids": [entry.id],
            "documents": [entry.text],
            "metadatas": [dict(entry.metadata)],
        }
        if entry.vector is not None:
            kwargs["embeddings"] = [entry.vector]

        try:
            await self._run(self.collection.add, **kwargs)
        except Exception as e:
            self.logger.error("Failed to add Chroma item", item_id=entry.id, error=str(e))
            raise DatabaseError(
                f"Failed to store document in Chroma: {e}", self.name, "store"
            ) from e

        self.logger.debug("Chroma item added", item_id=entry.id, collection=self.collection_name)

    async def close(self) -> None:
        self.collection = None
        self.client = None
        self.logger.info("Chroma backend closed")
