"""API-based embedding provider implementation."""

import aiohttp
from typing import List, Optional, Dict

from ...core.exceptions import EmbeddingError
from .base import EmbeddingProvider


class ApiEmbeddingProvider(EmbeddingProvider):
    """Embedding provider for OpenAI-compatible ``/v1/embeddings`` endpoints."""

    def __init__(self, settings):
        super().__init__(settings)
        self._session: Optional[aiohttp.ClientSession] = None
        self._dimension: Optional[int] = None

    @property
    def provider_name(self) -> str:
        return "api"

    async def initialize(self) -> None:
        """Initialize API-based embedding provider."""
        if self._initialized:
            return
        if not self.settings.EMBEDDING_API_BASE:
            raise EmbeddingError("EMBEDDING_API_BASE required for API provider", self.provider_name)

        timeout = aiohttp.ClientTimeout(total=30)
        self._session = aiohttp.ClientSession(timeout=timeout)

        # Probe once so a bad endpoint fails at startup, not on first query
        try:
            probe = await self._api_embed_texts(["test"])
            self._dimension = len(probe[0]) if probe else None
            self._initialized = True

            self.logger.info(
                "API embedding provider initialized",
                api_base=self.settings.EMBEDDING_API_BASE,
                model=self.settings.EMBEDDING_MODEL,
                dimension=self._dimension,
            )
        except Exception as e:
            await self.close()
            raise EmbeddingError(
                f"API embedding provider initialization failed: {e}", self.provider_name
            ) from e

    async def close(self) -> None:
        """Close the API embedding provider."""
        if self._session:
            await self._session.close()
            self._session = None

        self._initialized = False
        self.logger.info("API embedding provider closed")

    async def embed_texts(self, texts: List[str]) -> List[List[float]]:
        """Generate embeddings using API."""
        self._ensure_initialized()

        if not texts:
            return []

        prepared = self._prepare_texts(texts)

        try:
            embeddings = await self._api_embed_texts(prepared)
        except EmbeddingError:
            self.logger.error("Failed to embed texts via API", count=len(texts))
            raise
        except Exception as e:
            self.logger.error("Failed to embed texts via API", count=len(texts), error=str(e))
            raise EmbeddingError(f"Failed to embed texts via API: {e}", self.provider_name) from e

        self.logger.debug(
            "Texts embedded via API",
            count=len(prepared),
            embedding_dim=len(embeddings[0]) if embeddings else 0
        )
        return embeddings

    async def _api_embed_texts(self, texts: List[str]) -> List[List[float]]:
        """POST texts to the embeddings endpoint."""
        if not self._session:
            raise EmbeddingError("HTTP session not initialized", self.provider_name)

        headers = {
            "Content-Type": "application/json"
        }

        if self.settings.EMBEDDING_API_KEY:
            headers["Authorization"] = f"Bearer {self.settings.EMBEDDING_API_KEY}"

        payload = {
            "model": self.settings.EMBEDDING_MODEL,
            "input": texts
        }

        url = f"{self.settings.EMBEDDING_API_BASE.rstrip('/')}/v1/embeddings"

        try:
            async with self._session.post(url, headers=headers, json=payload) as response:
                if response.status != 200:
                    error_text = await response.text()
                    raise EmbeddingError(
                        f"API request failed: {response.status} - {error_text}", self.provider_name
                    )
                data = await response.json()
        except aiohttp.ClientError as e:
            raise EmbeddingError(f"API request error: {e}", self.provider_name) from e

        # The API may return items out of order
        items = sorted(data["data"], key=lambda item: item.get("index", 0))
        return [item["embedding"] for item in items]

    def get_embedding_dimension(self) -> int:
        """Get the dimension of embeddings produced by the API model."""
        self._ensure_initialized()
        if self._dimension:
            return self._dimension

        # Common dimensions for popular API models
        model_dims = {
            "text-embedding-3-small": 1536,
            "text-embedding-3-large": 3072,
            "text-embedding-ada-002": 1536,
            "embedding-001": 768,
            "all-MiniLM-L6-v2": 384,
            "all-mpnet-base-v2": 768,
        }
        return model_dims.get(self.settings.EMBEDDING_MODEL, self.settings.VECTOR_SIZE)

    def get_model_info(self) -> Dict:
        """Get API provider model information."""
        info = super().get_model_info()
        info["api_base"] = self.settings.EMBEDDING_API_BASE
        return info
