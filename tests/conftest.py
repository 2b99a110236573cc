"""Pytest configuration and fixtures for Vito MCP tests."""

from pathlib import Path

import pytest

from vito_mcp.config.settings import DatabaseType, Settings
from vito_mcp.rag.database import DatabaseService
from vito_mcp.rag.database.chroma import ChromaBackend
from vito_mcp.rag.database.qdrant import QdrantBackend
from tests.utils import FakeChromaClient, FakeEmbeddingManager, FakeQdrantClient, make_settings


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings for the Qdrant backend with a small vector size."""
    return make_settings(tmp_path)


@pytest.fixture
def chroma_settings(tmp_path: Path) -> Settings:
    """Settings for the embedded Chroma backend."""
    return make_settings(tmp_path, DATABASE_TYPE=DatabaseType.CHROMA)


@pytest.fixture
def fake_embeddings() -> FakeEmbeddingManager:
    return FakeEmbeddingManager(dimension=256)


@pytest.fixture
def fake_qdrant_client() -> FakeQdrantClient:
    return FakeQdrantClient()


@pytest.fixture
def fake_chroma_client() -> FakeChromaClient:
    return FakeChromaClient()


@pytest.fixture(params=[DatabaseType.QDRANT, DatabaseType.CHROMA], ids=["qdrant", "chroma"])
def backend_kind(request) -> DatabaseType:
    return request.param


@pytest.fixture
def database_service(tmp_path, backend_kind, fake_embeddings, fake_qdrant_client, fake_chroma_client):
    """DatabaseService over an in-memory client for each backend type."""
    settings = make_settings(tmp_path, DATABASE_TYPE=backend_kind)
    if backend_kind == DatabaseType.QDRANT:
        backend = QdrantBackend(settings, fake_embeddings, client=fake_qdrant_client)
    else:
        backend = ChromaBackend(settings, fake_embeddings, client=fake_chroma_client)
    return DatabaseService(settings, embedding_manager=fake_embeddings, backend=backend)


@pytest.fixture
def sample_documents():
    """Sample documents for search tests."""
    return [
        ("The sky is blue during a clear day", "nature"),
        ("Grass is green and grows in fields", "nature"),
        ("Python is a programming language with dynamic typing", "software"),
        ("Qdrant stores dense vectors for similarity search", "software"),
    ]
