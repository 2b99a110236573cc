"""
Embedding generation for the vector store.

Two provider backends are available:

- **API Provider**: Uses external OpenAI-compatible endpoints for embeddings
- **Local Provider**: Uses sentence-transformers for local embedding generation

EmbeddingManager selects a provider from ``EMBEDDING_PROVIDER`` and is the
single text-to-vector entry point used by both the ingestion and the query
paths.
"""

from .base import EmbeddingProvider
from .manager import EmbeddingManager

__all__ = ["EmbeddingManager", "EmbeddingProvider"]
