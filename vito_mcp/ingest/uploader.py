"""Directory uploader: extracts text and PDF files into the vector store."""

import asyncio
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ..config.logging import LoggerMixin
from ..core.exceptions import DatabaseNotInitializedError, IngestionError
from ..models.base import utc_now
from ..models.ingest import IngestionReport
from ..rag.database import DatabaseService
from .extractors import PDF_SUFFIXES, TEXT_SUFFIXES, extract


class DocumentUploader(LoggerMixin):
    """Stores every ``.txt`` and ``.pdf`` file of a directory as domain knowledge.

    Files are stored one at a time, text files first. A file that fails is
    logged and recorded in the report; the remaining files are still processed.
    """

    def __init__(self, service: DatabaseService):
        self.service = service

    @staticmethod
    def discover(directory: Path) -> Tuple[List[Path], List[Path]]:
        """Return (text files, PDF files) directly inside ``directory``, sorted."""
        files = sorted(p for p in directory.iterdir() if p.is_file())
        text_files = [p for p in files if p.suffix.lower() in TEXT_SUFFIXES]
        pdf_files = [p for p in files if p.suffix.lower() in PDF_SUFFIXES]
        return text_files, pdf_files

    async def process_file(self, path: Path, domain: str) -> Optional[str]:
        """Store one file and return its document id, or None if it had no text."""
        self.logger.info("Processing file", path=str(path))

        loop = asyncio.get_running_loop()
        extracted = await loop.run_in_executor(None, extract, path)

        if not extracted.text.strip():
            self.logger.warning("No extractable text, skipping", path=str(path))
            return None

        metadata: Dict[str, Any] = {
            "source": path.name,
            "filename": path.name,
            "path": str(path),
            "file_type": extracted.file_type,
        }
        if extracted.file_type == "pdf":
            metadata["page_count"] = extracted.page_count

        document_id = await self.service.store_domain_knowledge(extracted.text, domain, metadata)
        self.logger.info("Uploaded document", path=str(path), document_id=document_id)
        return document_id

    async def process_directory(
        self,
        directory: Union[str, Path],
        domain: str,
    ) -> IngestionReport:
        """Upload all supported files in ``directory`` under ``domain``."""
        directory = Path(directory)
        if not directory.is_dir():
            raise IngestionError(f"{directory} is not a valid directory", str(directory))

        text_files, pdf_files = self.discover(directory)
        self.logger.info(
            "Processing directory",
            directory=str(directory),
            text_files=len(text_files),
            pdf_files=len(pdf_files),
        )

        report = IngestionReport(directory=str(directory), domain=domain)
        for path in text_files + pdf_files:
            try:
                document_id = await self.process_file(path, domain)
            except DatabaseNotInitializedError:
                raise
            except Exception as e:
                self.logger.error("Error processing file", path=str(path), error=str(e))
                report.failed_paths.append(str(path))
                continue

            if document_id is None:
                report.skipped_paths.append(str(path))
            else:
                report.stored_ids.append(document_id)

        report.finished_at = utc_now()
        self.logger.info(
            "Completed processing directory",
            directory=str(directory),
            stored=report.stored_count,
            failed=report.failed_count,
        )
        return report
