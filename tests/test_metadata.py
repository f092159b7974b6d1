"""Tests for YAML metadata parsing."""

from __future__ import annotations

import datetime

import pytest

from docquery.errors import MetadataSyntaxError
from docquery.ingestion.metadata import parse_yaml_metadata


class TestParseYamlMetadata:
    """Test parse_yaml_metadata function."""

    def test_empty_block(self) -> None:
        """Should return an empty map for an empty block."""
        assert parse_yaml_metadata("") == {}
        assert parse_yaml_metadata("   \n") == {}

    def test_comment_only_block(self) -> None:
        """Should return an empty map when YAML yields nothing."""
        assert parse_yaml_metadata("# nothing here") == {}

    def test_scalar_and_nested_values(self) -> None:
        """Should keep YAML types."""
        fields = parse_yaml_metadata(
            "title: Foo\norder: 3\nscore: 1.5\ndate: 2014-01-02\nmeta:\n  draft: true\n"
        )

        assert fields == {
            "title": "Foo",
            "order": 3,
            "score": 1.5,
            "date": datetime.date(2014, 1, 2),
            "meta": {"draft": True},
        }

    def test_keys_are_strings(self) -> None:
        """Should convert top-level keys to strings."""
        assert parse_yaml_metadata("1: one") == {"1": "one"}

    def test_preserves_order(self) -> None:
        """Should keep declaration order."""
        assert list(parse_yaml_metadata("b: 1\na: 2\nc: 3")) == ["b", "a", "c"]

    def test_invalid_yaml(self) -> None:
        """Should raise MetadataSyntaxError on invalid YAML."""
        with pytest.raises(MetadataSyntaxError) as excinfo:
            parse_yaml_metadata("title: [unclosed")

        assert excinfo.value.preview == "title: [unclosed"

    def test_non_mapping(self) -> None:
        """Should reject a block that is not a mapping."""
        with pytest.raises(MetadataSyntaxError, match="mapping"):
            parse_yaml_metadata("- a\n- b")
