"""Command-line interface for Vito MCP."""

import asyncio
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.table import Table

from .config.logging import setup_logging
from .config.settings import DatabaseType, Settings
from .core.server import VitoServer
from .ingest import DocumentUploader
from .rag.database import DatabaseService

app = typer.Typer(
    name="vito-mcp",
    help="Vito MCP - RAG server over Qdrant or Chroma vector databases",
    add_completion=False,
)
# stdout belongs to the MCP stdio transport when serving
console = Console(stderr=True)
output = Console()


def _load_settings(
    database: Optional[DatabaseType] = None,
    collection: Optional[str] = None,
    debug: bool = False,
) -> Settings:
    overrides: Dict[str, Any] = {}
    if database is not None:
        overrides["DATABASE_TYPE"] = database
    if collection:
        overrides["COLLECTION_NAME"] = collection
    if debug:
        overrides["DEBUG"] = True
        overrides["LOG_LEVEL"] = "DEBUG"
    return Settings(**overrides)


@app.command("serve")
def run_server(
    database: Optional[DatabaseType] = typer.Option(
        None, "--database", "-d", help="Vector database backend"
    ),
    collection: Optional[str] = typer.Option(None, "--collection", "-c", help="Collection name"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug mode"),
) -> None:
    """Start the MCP server on stdio."""
    try:
        settings = _load_settings(database, collection, debug)
        console.print(
            f"[green]Starting Vito MCP server ({settings.DATABASE_TYPE.value}, "
            f"collection {settings.COLLECTION_NAME})[/green]"
        )

        server = VitoServer(settings)
        asyncio.run(server.start())

    except KeyboardInterrupt:
        console.print("\n[yellow]Server stopped by user[/yellow]")
    except Exception as e:
        console.print(f"[red]Error starting server: {e}[/red]")
        sys.exit(1)


async def _upload(settings: Settings, directory: Path, domain: str):
    service = DatabaseService(settings)
    try:
        await service.initialize()
        return await DocumentUploader(service).process_directory(directory, domain)
    finally:
        await service.close()


@app.command("upload")
def upload_documents(
    directory: Path = typer.Argument(..., help="Directory containing .txt and .pdf files"),
    domain: str = typer.Option("documents", "--domain", help="Domain tag for the stored documents"),
    database: Optional[DatabaseType] = typer.Option(
        None, "--database", "-d", help="Vector database backend"
    ),
    collection: Optional[str] = typer.Option(None, "--collection", "-c", help="Collection name"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug mode"),
) -> None:
    """Upload every text and PDF file in a directory."""
    settings = _load_settings(database, collection, debug)
    setup_logging(settings)

    try:
        report = asyncio.run(_upload(settings, directory, domain))
    except Exception as e:
        console.print(f"[red]Upload failed: {e}[/red]")
        sys.exit(1)

    output.print(
        f"[green]Stored {report.stored_count} document(s)[/green] from {report.directory}"
    )
    for path in report.skipped_paths:
        output.print(f"[yellow]Skipped (no text): {path}[/yellow]")
    for path in report.failed_paths:
        output.print(f"[red]Failed: {path}[/red]")
    if report.failed_paths:
        sys.exit(2)


async def _search(settings: Settings, query: str, limit: int, threshold: Optional[float]):
    service = DatabaseService(settings)
    try:
        await service.initialize()
        options: Dict[str, Any] = {"limit": limit, "raise_on_error": True}
        # Omitted threshold falls back to DEFAULT_SCORE_THRESHOLD
        if threshold is not None:
            options["score_threshold"] = threshold
        return await service.search(query, **options)
    finally:
        await service.close()


@app.command("search")
def search_documents(
    query: str = typer.Argument(..., help="Text to search for"),
    limit: int = typer.Option(3, "--limit", "-n", min=1, help="Maximum number of results"),
    threshold: Optional[float] = typer.Option(
        None, "--threshold", "-t", min=0.0, max=1.0, help="Minimum similarity score"
    ),
    database: Optional[DatabaseType] = typer.Option(
        None, "--database", "-d", help="Vector database backend"
    ),
    collection: Optional[str] = typer.Option(None, "--collection", "-c", help="Collection name"),
) -> None:
    """Run a similarity search and print the results."""
    settings = _load_settings(database, collection)
    setup_logging(settings)

    try:
        results = asyncio.run(_search(settings, query, limit, threshold))
    except Exception as e:
        console.print(f"[red]Search failed: {e}[/red]")
        sys.exit(1)

    if not results:
        output.print("[yellow]No matching documents[/yellow]")
        return

    table = Table(title=f"Results for: {query}")
    table.add_column("Score", justify="right")
    table.add_column("Source")
    table.add_column("Text")
    for result in results:
        snippet = result.text if len(result.text) <= 120 else result.text[:117] + "..."
        table.add_row(f"{result.score:.3f}", result.source, snippet)
    output.print(table)


@app.command("init")
def init_project(
    directory: Path = typer.Argument(Path("."), help="Directory to initialize"),
    database: DatabaseType = typer.Option(
        DatabaseType.QDRANT, "--database", "-d", help="Vector database backend"
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite existing files"),
) -> None:
    """Write a starter .env configuration."""
    directory = directory.resolve()

    if not directory.exists():
        directory.mkdir(parents=True)

    config_file = directory / ".env"

    if config_file.exists() and not force:
        console.print(f"[yellow]Configuration file already exists: {config_file}[/yellow]")
        console.print("Use --force to overwrite")
        return

    config_content = f"""# Vito MCP Configuration
DEBUG=false
LOG_LEVEL=INFO

# Vector database
DATABASE_TYPE={database.value}
COLLECTION_NAME=documents
VECTOR_SIZE=768

# Qdrant
QDRANT_URL=http://localhost:6333
QDRANT_API_KEY=

# Chroma (leave CHROMA_URL empty for the embedded store)
CHROMA_URL=
CHROMA_PERSIST_DIRECTORY=./data/chroma

# Embeddings
EMBEDDING_PROVIDER=local
EMBEDDING_MODEL=all-mpnet-base-v2
"""

    config_file.write_text(config_content)
    console.print(f"[green]Initialized Vito MCP project in {directory}[/green]")
    console.print(f"Configuration file: {config_file}")


@app.command("version")
def show_version() -> None:
    """Show version information."""
    from . import __version__
    output.print(f"Vito MCP version {__version__}")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
