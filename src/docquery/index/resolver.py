"""Resolve matched file paths into documents."""

from __future__ import annotations

from pathlib import Path

from docquery.config import QueryConfig
from docquery.errors import UnmatchedPathError
from docquery.index.defaults import DefaultsCascade
from docquery.ingestion.metadata import MetadataParser, parse_yaml_metadata
from docquery.ingestion.splitter import parse_file
from docquery.models import Document, FieldMap
from docquery.pattern.template import PathPattern
from docquery.utils.files import relative_posix


class DocumentResolver:
    """Builds a fresh :class:`Document` for a path on every call.

    Path-derived fields win over fields from the file's own metadata block,
    and both win over cascaded defaults. The file's own content is kept when
    non-empty, otherwise the nearest default content is used.
    """

    def __init__(
        self,
        pattern: PathPattern,
        root: Path,
        *,
        config: QueryConfig | None = None,
        parser: MetadataParser = parse_yaml_metadata,
        cascade: DefaultsCascade | None = None,
    ) -> None:
        self.pattern = pattern
        self.root = Path(root)
        self.config = config or QueryConfig()
        self.parser = parser
        self.cascade = cascade or DefaultsCascade(self.root, config=self.config, parser=parser)

    def match(self, path: Path) -> FieldMap | None:
        """Path-derived fields for ``path``, or ``None`` if it does not match."""
        try:
            relative = relative_posix(path, self.root)
        except ValueError:
            return None
        return self.pattern.match(relative)

    def resolve(self, path: Path) -> Document:
        path = Path(path)
        path_fields = self.match(path)
        if path_fields is None:
            raise UnmatchedPathError(f"{path} does not match {self.pattern.template!r}")

        own_fields, own_content = parse_file(
            path, self.parser, delimiter=self.config.delimiter, encoding=self.config.encoding
        )
        document_fields = {**own_fields, **path_fields}

        default_fields, default_content = self.cascade.resolve(path)
        fields = {**default_fields, **document_fields}
        return Document(path, fields, own_content or default_content)
