"""Input validation for store and search requests."""

import json
from typing import Any, Dict, Optional

from ..core.exceptions import ValidationError

SCALAR_TYPES = (str, int, float, bool)


def validate_text(text: str) -> None:
    """Validate document text."""
    if not isinstance(text, str):
        raise ValidationError("Document text must be a string", "text")

    if not text.strip():
        raise ValidationError("Document text cannot be empty", "text")


def validate_domain(domain: str) -> None:
    """Validate the domain tag."""
    if not isinstance(domain, str) or not domain.strip():
        raise ValidationError("Domain cannot be empty", "domain")

    if len(domain) > 255:
        raise ValidationError("Domain too long (max 255 characters)", "domain")


def validate_metadata(metadata: Optional[Dict[str, Any]]) -> None:
    """Validate caller-supplied document metadata."""
    if metadata is None:
        return

    if not isinstance(metadata, dict):
        raise ValidationError("Document metadata must be a dictionary", "metadata")

    try:
        json_str = json.dumps(metadata)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Document metadata not JSON serializable: {e}", "metadata")

    if len(json_str) > 64 * 1024:  # 64KB limit
        raise ValidationError("Document metadata too large (max 64KB)", "metadata")

    for key, value in metadata.items():
        if not isinstance(key, str):
            raise ValidationError("Document metadata keys must be strings", "metadata")
        if not _is_flat_value(value):
            raise ValidationError(
                f"Metadata value for '{key}' must be a string, number, boolean, null "
                "or a non-empty list of one scalar type",
                "metadata",
            )


def _is_flat_value(value: Any) -> bool:
    """Whether ``value`` can be stored as a metadata value on every backend."""
    if value is None or isinstance(value, SCALAR_TYPES):
        return True

    if isinstance(value, list) and value:
        if not all(isinstance(item, SCALAR_TYPES) for item in value):
            return False
        # bool is an int subclass; lists must not mix the two
        return len({type(item) for item in value}) == 1

    return False


def validate_search_query(query: str) -> None:
    """Validate search query."""
    if not isinstance(query, str):
        raise ValidationError("Search query must be a string", "query")

    if not query.strip():
        raise ValidationError("Search query cannot be empty", "query")


def validate_limit(limit: int) -> None:
    """Validate limit parameter."""
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValidationError("Limit must be an integer", "limit")

    if limit < 1:
        raise ValidationError("Limit must be positive", "limit")

    if limit > 1000:
        raise ValidationError("Limit too large (max 1000)", "limit")


def validate_score_threshold(threshold: Optional[float]) -> None:
    """Validate similarity score threshold."""
    if threshold is None:
        return

    if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
        raise ValidationError("Score threshold must be a number", "score_threshold")

    if not (0.0 <= threshold <= 1.0):
        raise ValidationError("Score threshold must be between 0.0 and 1.0", "score_threshold")
