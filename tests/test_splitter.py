"""Tests for metadata block splitting and file parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from docquery.errors import MetadataSyntaxError
from docquery.ingestion.metadata import parse_yaml_metadata
from docquery.ingestion.splitter import parse_file, read_file_parts, split_metadata_text


class TestSplitMetadataText:
    """Test split_metadata_text function."""

    def test_block_and_content(self) -> None:
        """Should separate the block from the content."""
        block, content = split_metadata_text("---\ntitle: foo\n---\n\nbody text\n")

        assert block == "title: foo"
        assert content == "body text"

    def test_no_block(self) -> None:
        """Should return the whole trimmed text as content."""
        block, content = split_metadata_text("  \n just content \n\n")

        assert block == ""
        assert content == "just content"

    def test_leading_blank_lines(self) -> None:
        """Should detect the delimiter as the first non-blank line."""
        block, content = split_metadata_text("\n\n---\na: 1\n---\nbody")

        assert block == "a: 1"
        assert content == "body"

    def test_unclosed_block(self) -> None:
        """Should treat the remainder as the block and leave content empty."""
        block, content = split_metadata_text("---\na: 1\nb: 2\n")

        assert block == "a: 1\nb: 2"
        assert content == ""

    def test_delimiter_only(self) -> None:
        """Should give an empty block and empty content."""
        assert split_metadata_text("---\n") == ("", "")

    def test_empty_input(self) -> None:
        """Should handle empty input."""
        assert split_metadata_text(b"") == ("", "")

    def test_bytes_input_and_bom(self) -> None:
        """Should decode bytes and drop a byte order mark."""
        raw = "\ufeff---\ntitle: café\n---\nbody".encode("utf-8")

        block, content = split_metadata_text(raw)

        assert block == "title: café"
        assert content == "body"

    def test_windows_line_endings(self) -> None:
        """Should recognise delimiters followed by CRLF."""
        block, content = split_metadata_text("---\r\na: 1\r\n---\r\nbody\r\n")

        assert block == "a: 1"
        assert content == "body"

    def test_trailing_whitespace_on_delimiter(self) -> None:
        """Should accept trailing spaces after the delimiter."""
        block, content = split_metadata_text("---   \na: 1\n---  \nbody")

        assert block == "a: 1"
        assert content == "body"

    def test_delimiter_not_first_line(self) -> None:
        """Should only recognise a delimiter on the first line."""
        text = "intro\n---\na: 1\n---\n"

        assert split_metadata_text(text) == ("", text.strip())

    def test_custom_delimiter(self) -> None:
        """Should honour a custom delimiter."""
        block, content = split_metadata_text("+++\na = 1\n+++\nbody", delimiter="+++")

        assert block == "a = 1"
        assert content == "body"


class TestReadFileParts:
    """Test reading files from disk."""

    def test_reads_file(self, tmp_path: Path) -> None:
        """Should read and split a file."""
        path = tmp_path / "doc.md"
        path.write_text("---\na: 1\n---\nbody")

        assert read_file_parts(path) == ("a: 1", "body")

    def test_missing_file(self, tmp_path: Path) -> None:
        """Should treat a missing file as empty."""
        assert read_file_parts(tmp_path / "missing.md") == ("", "")

    def test_directory_is_unreadable(self, tmp_path: Path) -> None:
        """Should treat an unreadable path as empty."""
        assert read_file_parts(tmp_path) == ("", "")

    def test_undecodable_file(self, tmp_path: Path) -> None:
        """Should treat a file that is not valid text as empty."""
        path = tmp_path / "doc.md"
        path.write_bytes(b"\xff\xfe\xfa body")

        assert read_file_parts(path) == ("", "")


class TestParseFile:
    """Test parse_file with the YAML parser."""

    def test_fields_and_content(self, tmp_path: Path) -> None:
        """Should parse the block into fields."""
        path = tmp_path / "doc.md"
        path.write_text("---\ntitle: foo\ntags: [a, b]\n---\nbody")

        fields, content = parse_file(path, parse_yaml_metadata)

        assert fields == {"title": "foo", "tags": ["a", "b"]}
        assert content == "body"

    def test_syntax_error_names_the_file(self, tmp_path: Path) -> None:
        """Should surface YAML errors with the offending path."""
        path = tmp_path / "bad.md"
        path.write_text("---\ntitle: [unclosed\n---\nbody")

        with pytest.raises(MetadataSyntaxError) as excinfo:
            parse_file(path, parse_yaml_metadata)

        assert excinfo.value.path == path
        assert str(path) in str(excinfo.value)
