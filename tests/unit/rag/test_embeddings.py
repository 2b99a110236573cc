"""Unit tests for embedding providers and the embedding manager."""

from unittest.mock import AsyncMock, MagicMock, patch

import numpy as np
import pytest

from vito_mcp.core.exceptions import EmbeddingError
from vito_mcp.rag.embeddings import EmbeddingManager
from vito_mcp.rag.embeddings.api import ApiEmbeddingProvider
from vito_mcp.rag.embeddings.local import LocalEmbeddingProvider
from tests.utils import MockFactory, make_settings


@pytest.fixture
def api_settings(tmp_path):
    return make_settings(
        tmp_path,
        EMBEDDING_PROVIDER="api",
        EMBEDDING_API_BASE="http://embeddings.local/",
        EMBEDDING_API_KEY="token",
        EMBEDDING_MAX_CHARS=10,
    )


class TestApiEmbeddingProvider:
    """Test the OpenAI-compatible API provider."""

    async def test_initialize_probes_dimension(self, api_settings):
        session = MockFactory.create_aiohttp_session_mock(
            MockFactory.create_embedding_response([[0.1, 0.2, 0.3]])
        )
        provider = ApiEmbeddingProvider(api_settings)

        with patch("vito_mcp.rag.embeddings.api.aiohttp.ClientSession", return_value=session):
            await provider.initialize()

        assert provider.is_initialized
        assert provider.get_embedding_dimension() == 3
        url = session.post.call_args.args[0]
        headers = session.post.call_args.kwargs["headers"]
        assert url == "http://embeddings.local/v1/embeddings"
        assert headers["Authorization"] == "Bearer token"

    async def test_initialize_requires_api_base(self, tmp_path):
        provider = ApiEmbeddingProvider(make_settings(tmp_path, EMBEDDING_PROVIDER="api"))

        with pytest.raises(EmbeddingError):
            await provider.initialize()

    async def test_failed_probe_raises(self, api_settings):
        session = MockFactory.create_aiohttp_session_mock(status=500)
        provider = ApiEmbeddingProvider(api_settings)

        with patch("vito_mcp.rag.embeddings.api.aiohttp.ClientSession", return_value=session):
            with pytest.raises(EmbeddingError):
                await provider.initialize()

        assert not provider.is_initialized
        session.close.assert_awaited_once()

    async def test_embed_texts_orders_by_index_and_truncates(self, api_settings):
        response = {"data": [
            {"index": 1, "embedding": [0.0, 1.0]},
            {"index": 0, "embedding": [1.0, 0.0]},
        ]}
        provider = ApiEmbeddingProvider(api_settings)
        provider._session = MockFactory.create_aiohttp_session_mock(response)
        provider._initialized = True

        vectors = await provider.embed_texts(["a" * 50, "second"])

        assert vectors == [[1.0, 0.0], [0.0, 1.0]]
        payload = provider._session.post.call_args.kwargs["json"]
        assert payload["input"] == ["a" * 10, "second"]

    async def test_embed_text_rejects_blank(self, api_settings):
        provider = ApiEmbeddingProvider(api_settings)
        provider._initialized = True

        with pytest.raises(EmbeddingError):
            await provider.embed_text("   ")

    async def test_not_initialized(self, api_settings):
        with pytest.raises(EmbeddingError):
            await ApiEmbeddingProvider(api_settings).embed_texts(["text"])


class TestLocalEmbeddingProvider:
    """Test the sentence-transformers provider with a stubbed model."""

    async def test_embed_texts_normalized(self, test_settings):
        provider = LocalEmbeddingProvider(test_settings)
        provider.model = MagicMock()
        provider.model.encode.return_value = np.array([[0.6, 0.8]])
        provider.model.get_sentence_embedding_dimension.return_value = 2
        provider._initialized = True

        vectors = await provider.embed_texts(["The sky is blue"])

        assert vectors == [[0.6, 0.8]]
        assert provider.model.encode.call_args.kwargs["normalize_embeddings"] is True
        assert provider.get_embedding_dimension() == 2

    async def test_encode_failure_wrapped(self, test_settings):
        provider = LocalEmbeddingProvider(test_settings)
        provider.model = MagicMock()
        provider.model.encode.side_effect = RuntimeError("out of memory")
        provider._initialized = True

        with pytest.raises(EmbeddingError):
            await provider.embed_texts(["The sky is blue"])


class TestEmbeddingManager:
    """Test provider selection and delegation."""

    async def test_selects_configured_provider(self, api_settings):
        provider = MagicMock()
        provider.initialize = AsyncMock()
        provider.close = AsyncMock()
        provider.embed_text = AsyncMock(return_value=[0.1] * 256)
        provider.provider_name = "api"
        provider.get_embedding_dimension.return_value = 256
        provider_cls = MagicMock(return_value=provider)

        with patch.dict("vito_mcp.rag.embeddings.manager.PROVIDERS", {"api": provider_cls}):
            manager = EmbeddingManager(api_settings)
            await manager.initialize()
            await manager.initialize()

        provider_cls.assert_called_once_with(api_settings)
        provider.initialize.assert_awaited_once()
        assert manager.provider_name == "api"
        assert await manager.embed_text("hello") == [0.1] * 256

        await manager.close()
        provider.close.assert_awaited_once()
        assert not manager.is_initialized

    async def test_unknown_provider(self, tmp_path):
        manager = EmbeddingManager(make_settings(tmp_path, EMBEDDING_PROVIDER="bogus"))

        with pytest.raises(EmbeddingError):
            await manager.initialize()

    async def test_provider_failure_wrapped(self, api_settings):
        provider_cls = MagicMock(side_effect=RuntimeError("no model"))

        with patch.dict("vito_mcp.rag.embeddings.manager.PROVIDERS", {"api": provider_cls}):
            manager = EmbeddingManager(api_settings)
            with pytest.raises(EmbeddingError):
                await manager.initialize()

        assert not manager.is_initialized

    async def test_use_before_initialize(self, test_settings):
        with pytest.raises(EmbeddingError):
            await EmbeddingManager(test_settings).embed_text("hello")

    def test_provider_name_falls_back_to_settings(self, api_settings):
        assert EmbeddingManager(api_settings).provider_name == "api"
