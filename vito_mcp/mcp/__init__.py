"""MCP protocol tools."""

from .rag_tools import RAGTools

__all__ = ["RAGTools"]
