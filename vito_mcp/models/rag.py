"""RAG domain models for Vito MCP."""

from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field, field_validator

from .base import IdentifiedModel, VitoBaseModel, utc_now

DOMAIN_KNOWLEDGE_TYPE = "domain_knowledge"
METADATA_SCHEMA_VERSION = 1


def stamp_metadata(
    domain: str,
    metadata: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Return caller metadata with the domain-knowledge stamp applied.

    The stamped keys win over caller-supplied keys of the same name.
    """
    return {
        **(metadata or {}),
        "domain": domain,
        "timestamp": utc_now().isoformat(),
        "type": DOMAIN_KNOWLEDGE_TYPE,
        "version": METADATA_SCHEMA_VERSION,
    }


class DocumentEntry(IdentifiedModel):
    """A single text entry written to a vector collection."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="Document body")
    vector: Optional[List[float]] = Field(
        default=None,
        description="Embedding vector (length must match the collection's vector size)"
    )
    metadata: Dict[str, Any] = Field(
        default_factory=dict,
        description="Stamped document metadata"
    )

    @property
    def dimension(self) -> Optional[int]:
        return len(self.vector) if self.vector is not None else None


class QueryResult(VitoBaseModel):
    """A similarity search hit in the backend-independent shape.

    ``metadata`` always carries ``source`` (str) and ``score`` (float, higher
    means more similar) next to any backend-native fields.
    """

    text: str = Field(description="Matched document text")
    metadata: Dict[str, Any] = Field(description="Hit metadata including source and score")

    @field_validator("metadata")
    @classmethod
    def require_source_and_score(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        if "source" not in v or not isinstance(v["source"], str):
            raise ValueError("metadata.source must be a string")
        score = v.get("score")
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            raise ValueError("metadata.score must be numeric")
        return v

    @property
    def score(self) -> float:
        return float(self.metadata["score"])

    @property
    def source(self) -> str:
        return self.metadata["source"]

    @classmethod
    def from_native(
        cls,
        text: Optional[Any],
        native_metadata: Optional[Dict[str, Any]],
        score: float,
    ) -> "QueryResult":
        """Build a result from a backend hit.

        Native fields are merged first so that ``source`` and ``score`` always
        hold the normalized values. ``source`` falls back to the stored domain.
        """
        native = dict(native_metadata or {})
        source = native.get("source") or native.get("domain") or ""
        return cls(
            text="" if text is None else str(text),
            metadata={**native, "source": str(source), "score": float(score)},
        )
