"""Tests for query configuration."""

from __future__ import annotations

from pathlib import Path

from docquery.config import DEFAULTS_FILE_NAME, QueryConfig


class TestQueryConfig:
    """Test QueryConfig dataclass."""

    def test_default_config(self) -> None:
        """Should create config with default values."""
        config = QueryConfig()

        assert config.defaults_file_name == "_defaults.md" == DEFAULTS_FILE_NAME
        assert config.encoding == "utf-8"
        assert config.delimiter == "---"

    def test_custom_config(self) -> None:
        """Should create config with custom values."""
        config = QueryConfig(defaults_file_name="meta.md", encoding="latin-1", delimiter="+++")

        assert config.defaults_file_name == "meta.md"
        assert config.encoding == "latin-1"
        assert config.delimiter == "+++"

    def test_defaults_file_name_is_bare(self) -> None:
        """Should strip a leading separator from the defaults file name."""
        assert QueryConfig(defaults_file_name="/meta.md").defaults_file_name == "meta.md"

    def test_resolve_root_absolute(self) -> None:
        """Should return absolute path as-is."""
        resolved = QueryConfig().resolve_root(Path("/absolute/data"), base_dir=Path("/base"))

        assert resolved == Path("/absolute/data")

    def test_resolve_root_relative_no_base(self) -> None:
        """Should return relative path when no base_dir provided."""
        assert QueryConfig().resolve_root("data") == Path("data")

    def test_resolve_root_relative_with_base(self) -> None:
        """Should resolve relative path against base_dir."""
        resolved = QueryConfig().resolve_root("data", base_dir=Path("/base/directory"))

        assert resolved == Path("/base/directory/data")
