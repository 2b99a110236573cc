"""
Vector database layer with interchangeable backends.

- **VectorBackend**: adapter interface (ensure collection, store entry,
  search by vector)
- **QdrantBackend**: networked Qdrant service; cosine similarity is returned
  natively as the score
- **ChromaBackend**: embedded or HTTP Chroma collections; scores are derived
  from cosine distance as ``1 - distance``
- **DatabaseService**: façade that picks one backend from settings and keeps
  the result shape uniform
"""

from .base import VectorBackend
from .chroma import ChromaBackend, ChromaEmbeddingFunction
from .qdrant import QdrantBackend
from .service import BACKENDS, DatabaseService

__all__ = [
    "BACKENDS",
    "ChromaBackend",
    "ChromaEmbeddingFunction",
    "DatabaseService",
    "QdrantBackend",
    "VectorBackend",
]
