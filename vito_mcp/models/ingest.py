"""Document ingestion models for Vito MCP."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .base import VitoBaseModel, utc_now


class IngestionReport(VitoBaseModel):
    """Outcome of ingesting one directory."""

    directory: str = Field(description="Directory that was processed")
    domain: str = Field(description="Domain tag applied to every stored document")
    stored_ids: List[str] = Field(default_factory=list, description="IDs of stored documents")
    failed_paths: List[str] = Field(default_factory=list, description="Files that could not be stored")
    skipped_paths: List[str] = Field(default_factory=list, description="Files with no extractable text")
    started_at: datetime = Field(default_factory=utc_now)
    finished_at: Optional[datetime] = Field(default=None)

    @property
    def stored_count(self) -> int:
        return len(self.stored_ids)

    @property
    def failed_count(self) -> int:
        return len(self.failed_paths)
