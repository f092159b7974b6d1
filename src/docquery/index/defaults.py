"""Directory-cascading defaults."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

from docquery.config import QueryConfig
from docquery.errors import InvalidArgumentError
from docquery.ingestion.metadata import MetadataParser, parse_yaml_metadata
from docquery.ingestion.splitter import parse_file
from docquery.models import FieldMap
from docquery.utils.files import directory_chain

LOGGER = logging.getLogger(__name__)


class DefaultsCascade:
    """Merges the defaults files found between the query root and a document.

    Each directory from the root down to the document's parent may hold a
    defaults file. Fields from nearer directories overwrite same-named fields
    from shallower ones; the nearest non-empty content wins.
    """

    def __init__(
        self,
        root: Path,
        *,
        config: QueryConfig | None = None,
        parser: MetadataParser = parse_yaml_metadata,
    ) -> None:
        self.root = Path(root)
        self.config = config or QueryConfig()
        self.parser = parser

    @property
    def file_name(self) -> str:
        return self.config.defaults_file_name

    def resolve(self, file_path: Path) -> Tuple[FieldMap, str]:
        """Return the merged ``(fields, content)`` defaults for ``file_path``."""
        try:
            chain = directory_chain(self.root, Path(file_path))
        except ValueError as exc:
            raise InvalidArgumentError(f"{file_path} is not inside {self.root}") from exc

        fields: FieldMap = {}
        content = ""
        for directory in chain:
            defaults_path = directory / self.file_name
            if not defaults_path.is_file():
                continue
            level_fields, level_content = parse_file(
                defaults_path,
                self.parser,
                delimiter=self.config.delimiter,
                encoding=self.config.encoding,
            )
            LOGGER.debug("Applying defaults from %s", defaults_path)
            fields.update(level_fields)
            if level_content:
                content = level_content
        return fields, content
