"""Main entry point for the Vito MCP server."""

import asyncio
import sys

from vito_mcp import Settings, VitoServer


async def main() -> None:
    """Main entry point."""
    try:
        settings = Settings()
        server = VitoServer(settings)
        await server.start()

    except KeyboardInterrupt:
        print("\nServer stopped by user", file=sys.stderr)
    except Exception as e:
        print(f"Error starting server: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
