"""Qdrant backend: networked dense-vector index service."""

from typing import List, Optional

from qdrant_client import AsyncQdrantClient, models

from ...config.settings import DatabaseType, Settings
from ...core.exceptions import DatabaseError, SearchError
from ...models.rag import DocumentEntry, QueryResult
from ..embeddings import EmbeddingManager
from .base import VectorBackend


class QdrantBackend(VectorBackend):
    """Stores points with explicit vectors and searches by cosine similarity."""

    db_type = DatabaseType.QDRANT

    def __init__(
        self,
        settings: Settings,
        embedding_manager: EmbeddingManager,
        client: Optional[AsyncQdrantClient] = None,
    ):
        super().__init__(settings, embedding_manager)
        self.client = client
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        return self._initialized and self.client is not None

    def _create_client(self) -> AsyncQdrantClient:
        return AsyncQdrantClient(
            url=self.settings.QDRANT_URL,
            api_key=self.settings.QDRANT_API_KEY,
        )

    async def ensure_collection(self) -> None:
        """Create the collection with the configured size and cosine distance if absent."""
        if self.client is None:
            self.client = self._create_client()

        try:
            response = await self.client.get_collections()
            exists = any(c.name == self.collection_name for c in response.collections)

            if not exists:
                self.logger.info("Creating Qdrant collection", collection=self.collection_name)
                await self.client.create_collection(
                    collection_name=self.collection_name,
                    vectors_config=models.VectorParams(
                        size=self.settings.VECTOR_SIZE,
                        distance=models.Distance.COSINE,
                    ),
                )
                self.logger.info("Qdrant collection created", collection=self.collection_name)
            else:
                self.logger.info("Qdrant collection already exists", collection=self.collection_name)

        except Exception as e:
            self.logger.error(
                "Error ensuring Qdrant collection exists",
                collection=self.collection_name,
                error=str(e),
            )
            raise DatabaseError(
                f"Failed to ensure Qdrant collection {self.collection_name}: {e}",
                self.name,
                "ensure_collection",
            ) from e

        self._initialized = True

    async def search(
        self,
        vector: List[float],
        limit: int,
        score_threshold: Optional[float] = None,
    ) -> List[QueryResult]:
        """Query points; the score cutoff is applied server-side."""
        self.require_initialized("search")

        try:
            response = await self.client.query_points(
                collection_name=self.collection_name,
                query=vector,
                limit=limit,
                score_threshold=score_threshold,
                with_payload=True,
            )
        except Exception as e:
            raise SearchError(
                f"Error searching Qdrant collection {self.collection_name}: {e}", self.name
            ) from e

        results = []
        for point in response.points:
            payload = dict(point.payload or {})
            text = payload.pop("text", "")
            results.append(QueryResult.from_native(text, payload, point.score))
        return results

    async def store(self, entry: DocumentEntry) -> None:
        """Upsert one point keyed by the entry id."""
        self.require_initialized("store")
        if entry.vector is None:
            raise DatabaseError("Qdrant points require an embedding vector", self.name, "store")

        try:
            await self.client.upsert(
                collection_name=self.collection_name,
                points=[
                    models.PointStruct(
                        id=entry.id,
                        vector=entry.vector,
                        # Document body and embedding tag take precedence over caller keys
                        payload={
                            **entry.metadata,
                            "text": entry.text,
                            "embedding_type": self.embedding_manager.provider_name,
                        },
                    )
                ],
                wait=True,
            )
        except Exception as e:
            self.logger.error("Failed to upsert Qdrant point", point_id=entry.id, error=str(e))
            raise DatabaseError(
                f"Failed to store document in Qdrant: {e}", self.name, "store"
            ) from e

        self.logger.debug("Qdrant point upserted", point_id=entry.id, collection=self.collection_name)

    async def close(self) -> None:
        if self.client is not None:
            await self.client.close()
            self.client = None
        self._initialized = False
        self.logger.info("Qdrant backend closed")
