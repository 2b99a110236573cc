"""Unit tests for input validation."""

import pytest

from vito_mcp.core.exceptions import ValidationError
from vito_mcp.utils.validation import validate_metadata


class TestValidateMetadata:
    """Test metadata accepted by every backend."""

    @pytest.mark.parametrize("metadata", [
        None,
        {},
        {"source": "sky.txt", "page": 2, "ratio": 0.5, "draft": True, "note": None},
        {"tags": ["sky", "weather"]},
        {"pages": [1, 2, 3]},
    ])
    def test_flat_metadata_accepted(self, metadata):
        validate_metadata(metadata)

    @pytest.mark.parametrize("metadata", [
        {"nested": {"a": 1}},
        {"tags": []},
        {"tags": [1, "two"]},
        {"flags": [True, 1]},
        {"rows": [[1, 2]]},
        {1: "non-string key"},
    ])
    def test_non_flat_metadata_rejected(self, metadata):
        with pytest.raises(ValidationError) as exc_info:
            validate_metadata(metadata)

        assert exc_info.value.details["field"] == "metadata"

    def test_non_dict_rejected(self):
        with pytest.raises(ValidationError):
            validate_metadata(["a", "b"])

    def test_oversized_rejected(self):
        with pytest.raises(ValidationError):
            validate_metadata({"blob": "x" * (64 * 1024 + 1)})
