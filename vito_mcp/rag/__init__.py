"""RAG (Retrieval-Augmented Generation) storage and retrieval."""

from .database import DatabaseService
from .embeddings import EmbeddingManager

__all__ = ["DatabaseService", "EmbeddingManager"]
