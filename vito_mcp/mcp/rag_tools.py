"""RAG-related MCP tools."""

from typing import Annotated, Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from ..config.logging import LoggerMixin
from ..rag.database import DatabaseService


class RAGTools(LoggerMixin):
    """Exposes the database service as MCP tools."""

    def __init__(self, mcp: FastMCP, service: DatabaseService):
        self.mcp = mcp
        self.service = service
        self._register_tools()

    def _register_tools(self) -> None:
        """Register RAG tools with FastMCP server."""
        self.mcp.tool(name="rag_search")(self.rag_search)
        self.mcp.tool(name="rag_store_domain_knowledge")(self.rag_store_domain_knowledge)
        self.mcp.tool(name="rag_database_info")(self.rag_database_info)

    async def rag_search(
        self,
        query: Annotated[str, Field(description="Text query to search for (will be embedded for comparison)")],
        limit: Annotated[int, Field(
            description="Maximum number of results to return",
            ge=1, le=100
        )] = 3,
        score_threshold: Annotated[Optional[float], Field(
            description="Minimum similarity score (0.0-1.0); omit to use the server default",
            ge=0.0, le=1.0
        )] = None,
    ) -> List[dict]:
        """Search stored domain knowledge by semantic similarity.

        Returns:
            List of ``{"text", "metadata"}`` dictionaries ordered by relevance
            (highest score first). ``metadata`` always contains ``source`` and
            ``score``.
        """
        if score_threshold is None:
            results = await self.service.search(query=query, limit=limit)
        else:
            results = await self.service.search(
                query=query, limit=limit, score_threshold=score_threshold
            )

        self.logger.info("Document search performed", query=query, results=len(results))
        return [result.model_dump() for result in results]

    async def rag_store_domain_knowledge(
        self,
        text: Annotated[str, Field(description="Text content to store and index")],
        domain: Annotated[str, Field(description="Domain or topic the knowledge belongs to")],
        metadata: Annotated[Optional[Dict[str, Any]], Field(
            description="Optional extra metadata: flat key/value pairs whose values are scalars or non-empty lists of one scalar type"
        )] = None,
    ) -> dict:
        """Store a piece of domain knowledge in the vector database.

        Returns:
            Dictionary with the ``id`` the document was stored under.
        """
        document_id = await self.service.store_domain_knowledge(text, domain, metadata or {})

        self.logger.info("Domain knowledge stored via MCP", document_id=document_id, domain=domain)
        return {"id": document_id, "domain": domain}

    async def rag_database_info(self) -> dict:
        """Describe the active vector database backend, collection and embedding model."""
        embeddings = self.service.embedding_manager
        return {
            "db_type": self.service.get_db_type().value,
            "collection": self.service.collection_name,
            "vector_size": self.service.settings.VECTOR_SIZE,
            "embedding": embeddings.get_model_info() if embeddings.is_initialized else None,
        }
