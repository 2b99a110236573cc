"""Main Vito MCP server implementation."""

from typing import Optional

from mcp.server.fastmcp import FastMCP

from ..config.logging import LoggerMixin, setup_logging
from ..config.settings import Settings
from ..mcp.rag_tools import RAGTools
from ..rag.database import DatabaseService


class VitoServer(LoggerMixin):
    """MCP server exposing the vector store over stdio."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        service: Optional[DatabaseService] = None,
    ) -> None:
        """Initialize the server with configuration."""
        self.settings = settings or Settings()
        self.settings.create_directories()

        setup_logging(self.settings)
        self.logger.info("Initializing Vito MCP server", version=self.settings.MCP_SERVER_VERSION)
        self.logger.debug("Loaded settings", settings=self.settings.to_dict())

        self.service = service or DatabaseService(self.settings)
        self.mcp = FastMCP(self.settings.MCP_SERVER_NAME)
        self.tools = RAGTools(self.mcp, self.service)
        self._running = False

    async def start(self) -> None:
        """Initialize the database, then serve MCP over stdio until the client disconnects.

        A failed initialization is fatal and propagates to the caller.
        """
        try:
            await self.service.initialize()
        except Exception as e:
            self.logger.error("Failed to initialize database service", error=str(e))
            await self.service.close()
            raise

        self._running = True
        self.logger.info(
            "Vito MCP server ready",
            db_type=self.service.get_db_type().value,
            collection=self.service.collection_name,
        )
        try:
            await self.mcp.run_stdio_async()
        finally:
            await self.shutdown()

    async def shutdown(self) -> None:
        """Close the database service."""
        self._running = False
        await self.service.close()
        self.logger.info("Server shutdown complete")

    @property
    def is_running(self) -> bool:
        """Check if the server is running."""
        return self._running
