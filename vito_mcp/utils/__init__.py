"""Utility functions and helpers."""

from .validation import (
    validate_domain,
    validate_limit,
    validate_metadata,
    validate_score_threshold,
    validate_search_query,
    validate_text,
)

__all__ = [
    "validate_domain",
    "validate_limit",
    "validate_metadata",
    "validate_score_threshold",
    "validate_search_query",
    "validate_text",
]
