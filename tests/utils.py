"""Test utilities and in-memory doubles for Vito MCP tests."""

import hashlib
import re
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import numpy as np

from vito_mcp.config.settings import Settings
from vito_mcp.core.exceptions import EmbeddingError

STOP_WORDS = {"the", "is", "a", "an", "of", "and", "what", "to", "in"}


def cosine(a: List[float], b: List[float]) -> float:
    va = np.asarray(a, dtype=float)
    vb = np.asarray(b, dtype=float)
    norm = np.linalg.norm(va) * np.linalg.norm(vb)
    return float(va @ vb / norm) if norm else 0.0


class FakeEmbeddingManager:
    """Deterministic bag-of-words embedder.

    Each non-stop-word token is hashed into one of ``dimension`` buckets and
    the vector is L2-normalized, so texts sharing words have high cosine
    similarity and identical texts score 1.0.
    """

    def __init__(self, dimension: int = 256):
        self.dimension = dimension
        self._initialized = False
        self.calls: List[str] = []

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def provider_name(self) -> str:
        return "fake"

    async def initialize(self) -> None:
        self._initialized = True

    async def close(self) -> None:
        self._initialized = False

    def vector_for(self, text: str) -> List[float]:
        vector = np.zeros(self.dimension)
        for token in re.findall(r"[a-z0-9]+", text.lower()):
            if token in STOP_WORDS:
                continue
            bucket = int(hashlib.md5(token.encode()).hexdigest(), 16) % self.dimension
            vector[bucket] += 1.0
        norm = np.linalg.norm(vector)
        if norm == 0:
            raise EmbeddingError("Cannot embed empty text", self.provider_name)
        return (vector / norm).tolist()

    async def embed_text(self, text: str) -> List[float]:
        if not self._initialized:
            raise EmbeddingError("Embedding manager not initialized")
        self.calls.append(text)
        return self.vector_for(text)

    async def embed_texts(self, texts: List[str]) -> List[List[float]]:
        return [await self.embed_text(text) for text in texts]

    def get_embedding_dimension(self) -> int:
        return self.dimension


class FakeQdrantClient:
    """In-memory stand-in for qdrant_client.AsyncQdrantClient."""

    def __init__(self):
        self.collections: Dict[str, Dict[str, Any]] = {}
        self.points: Dict[str, Dict[str, Any]] = {}
        self.create_calls = 0
        self.fail_search: Optional[Exception] = None

    async def get_collections(self):
        return SimpleNamespace(
            collections=[SimpleNamespace(name=name) for name in self.collections]
        )

    async def create_collection(self, collection_name, vectors_config):
        self.create_calls += 1
        self.collections[collection_name] = {"vectors_config": vectors_config}
        return True

    async def upsert(self, collection_name, points, wait=True):
        for point in points:
            assert len(point.vector) == self.collections[collection_name]["vectors_config"].size
            self.points[str(point.id)] = {"vector": point.vector, "payload": dict(point.payload)}

    async def query_points(self, collection_name, query, limit, score_threshold=None, with_payload=True):
        if self.fail_search is not None:
            raise self.fail_search
        hits = []
        for point_id, point in self.points.items():
            score = cosine(query, point["vector"])
            if score_threshold is not None and score < score_threshold:
                continue
            hits.append(SimpleNamespace(id=point_id, score=score, payload=dict(point["payload"])))
        hits.sort(key=lambda h: h.score, reverse=True)
        return SimpleNamespace(points=hits[:limit])

    async def close(self):
        pass


class FakeChromaCollection:
    """In-memory stand-in for a chromadb Collection using cosine distance."""

    def __init__(self, name: str, embedding_function=None, metadata=None):
        self.name = name
        self.embedding_function = embedding_function
        self.metadata = metadata
        self.items: Dict[str, Dict[str, Any]] = {}

    def add(self, ids, documents, metadatas, embeddings=None):
        if embeddings is None:
            embeddings = self.embedding_function(documents)
        for item_id, document, metadata, embedding in zip(ids, documents, metadatas, embeddings):
            self.items[item_id] = {
                "document": document,
                "metadata": dict(metadata),
                "embedding": list(map(float, embedding)),
            }

    def query(self, query_embeddings, n_results, include):
        query = query_embeddings[0]
        rows = sorted(
            ((1.0 - cosine(query, item["embedding"]), item_id, item) for item_id, item in self.items.items()),
            key=lambda row: row[0],
        )[:n_results]
        return {
            "ids": [[item_id for _, item_id, _ in rows]],
            "documents": [[item["document"] for _, _, item in rows]],
            "metadatas": [[dict(item["metadata"]) for _, _, item in rows]],
            "distances": [[distance for distance, _, _ in rows]],
        }


class FakeChromaClient:
    """In-memory stand-in for a chromadb client."""

    def __init__(self):
        self.collections: Dict[str, FakeChromaCollection] = {}
        self.create_calls = 0

    def list_collections(self):
        return list(self.collections.values())

    def create_collection(self, name, metadata=None, embedding_function=None):
        self.create_calls += 1
        collection = FakeChromaCollection(name, embedding_function, metadata)
        self.collections[name] = collection
        return collection

    def get_collection(self, name, embedding_function=None):
        collection = self.collections[name]
        collection.embedding_function = embedding_function
        return collection


class MockFactory:
    """Factory for creating various mocks used in tests."""

    @staticmethod
    def create_aiohttp_session_mock(response_data: Any = None, status: int = 200) -> AsyncMock:
        """Create a mock aiohttp session."""
        session_mock = AsyncMock()
        response_mock = AsyncMock()
        response_mock.status = status

        if response_data is not None:
            response_mock.json = AsyncMock(return_value=response_data)
        response_mock.text = AsyncMock(return_value="error body")

        class MockAsyncContextManager:
            def __init__(self, response):
                self.response = response

            async def __aenter__(self):
                return self.response

            async def __aexit__(self, exc_type, exc_val, exc_tb):
                return None

        session_mock.post = MagicMock(return_value=MockAsyncContextManager(response_mock))
        return session_mock

    @staticmethod
    def create_embedding_response(embeddings: List[List[float]]) -> Dict[str, Any]:
        """Create an OpenAI-style embeddings response body."""
        return {
            "data": [
                {"object": "embedding", "index": i, "embedding": embedding}
                for i, embedding in enumerate(embeddings)
            ],
            "model": "text-embedding-3-small",
        }


def make_settings(tmp_path: Path, **overrides) -> Settings:
    """Settings isolated from any local .env file, with a small vector size."""
    values = {
        "DEBUG": True,
        "LOG_LEVEL": "DEBUG",
        "COLLECTION_NAME": "test_documents",
        "VECTOR_SIZE": 256,
        "DEFAULT_SEARCH_LIMIT": 3,
        "DEFAULT_SCORE_THRESHOLD": 0.3,
        "CHROMA_PERSIST_DIRECTORY": tmp_path / "chroma",
        "EMBEDDING_PROVIDER": "local",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)
