"""Main embedding manager that coordinates between providers."""

from typing import List, Dict, Any, Optional

from ...config.logging import LoggerMixin
from ...config.settings import Settings
from ...core.exceptions import EmbeddingError
from .base import EmbeddingProvider
from .api import ApiEmbeddingProvider
from .local import LocalEmbeddingProvider

PROVIDERS = {
    "api": ApiEmbeddingProvider,
    "local": LocalEmbeddingProvider,
}


class EmbeddingManager(LoggerMixin):
    """Turns text into fixed-length vectors for storage and search."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.provider: Optional[EmbeddingProvider] = None
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def provider_name(self) -> str:
        """Name of the active provider, used as the stored embedding tag."""
        if self.provider is not None:
            return self.provider.provider_name
        return self.settings.EMBEDDING_PROVIDER

    async def initialize(self) -> None:
        """Initialize the embedding manager with appropriate provider."""
        if self._initialized:
            return

        provider_cls = PROVIDERS.get(self.settings.EMBEDDING_PROVIDER)
        if provider_cls is None:
            raise EmbeddingError(
                f"Unknown embedding provider: {self.settings.EMBEDDING_PROVIDER}"
            )

        try:
            self.provider = provider_cls(self.settings)
            await self.provider.initialize()
        except EmbeddingError:
            self.provider = None
            raise
        except Exception as e:
            self.provider = None
            self.logger.error("Failed to initialize embedding manager", error=str(e))
            raise EmbeddingError(f"Embedding manager initialization failed: {e}") from e

        self._initialized = True
        self.logger.info(
            "Embedding manager initialized",
            provider=self.provider.provider_name,
            model=self.settings.EMBEDDING_MODEL
        )

        dimension = self.provider.get_embedding_dimension()
        if dimension != self.settings.VECTOR_SIZE:
            self.logger.warning(
                "Embedding dimension differs from configured vector size",
                dimension=dimension,
                vector_size=self.settings.VECTOR_SIZE,
            )

    async def close(self) -> None:
        """Close the embedding manager."""
        if self.provider:
            await self.provider.close()
            self.provider = None

        self._initialized = False
        self.logger.info("Embedding manager closed")

    def _ensure_initialized(self) -> None:
        """Ensure the embedding manager is initialized."""
        if not self._initialized or not self.provider:
            raise EmbeddingError("Embedding manager not initialized")

    async def embed_text(self, text: str) -> List[float]:
        """Generate embedding for a single text."""
        self._ensure_initialized()
        return await self.provider.embed_text(text)

    async def embed_texts(self, texts: List[str]) -> List[List[float]]:
        """Generate embeddings for multiple texts."""
        self._ensure_initialized()
        return await self.provider.embed_texts(texts)

    def get_embedding_dimension(self) -> int:
        """Get the dimension of embeddings produced by the model."""
        self._ensure_initialized()
        return self.provider.get_embedding_dimension()

    def get_model_info(self) -> Dict[str, Any]:
        """Get information about the embedding model."""
        self._ensure_initialized()
        return self.provider.get_model_info()
