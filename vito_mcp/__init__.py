"""
Vito MCP - an MCP server for retrieval-augmented generation over vector databases.

This package provides:
- A database service with one store/search contract over Qdrant and Chroma
- Pluggable embedding providers (OpenAI-compatible API or sentence-transformers)
- A directory uploader for text and PDF documents
- MCP tools exposing search and storage to LLM clients
"""

__version__ = "0.1.0"

from .core.server import VitoServer
from .config.settings import DatabaseType, Settings
from .rag.database import DatabaseService

__all__ = ["VitoServer", "DatabaseService", "DatabaseType", "Settings"]
