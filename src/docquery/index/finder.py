"""Query entry point: find the files matching a path template."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List

from docquery.config import QueryConfig
from docquery.errors import InvalidArgumentError, NotFoundError
from docquery.index.collection import Collection
from docquery.index.resolver import DocumentResolver
from docquery.ingestion.metadata import MetadataParser, parse_yaml_metadata
from docquery.pattern.template import compile_template
from docquery.utils.files import iter_file_paths

LOGGER = logging.getLogger(__name__)


def _check_root(root: Path) -> None:
    if not root.exists():
        raise NotFoundError(f"Invalid data directory: '{root}'")
    if not root.is_dir() or not os.access(root, os.R_OK | os.X_OK):
        raise InvalidArgumentError(f"Invalid data directory: '{root}'")


def find_document_paths(resolver: DocumentResolver, defaults_file_name: str) -> List[Path]:
    """Files under the resolver's root that match its template, defaults files excluded."""
    return [
        path
        for path in iter_file_paths(resolver.root)
        if path.name != defaults_file_name and resolver.match(path) is not None
    ]


def query(
    root: Path | str,
    template: str,
    defaults_file_name: str | None = None,
    *,
    config: QueryConfig | None = None,
    parser: MetadataParser = parse_yaml_metadata,
) -> Collection:
    """Open the files under ``root`` whose relative path matches ``template``.

    Args:
        root: Directory holding the documents.
        template: Path template relative to ``root``, for example
            ``"{{ order: d }}-{{ title: s }}.md"``.
        defaults_file_name: Name of the per-directory defaults file; overrides
            ``config.defaults_file_name`` when given.
        config: Query configuration.
        parser: Metadata block parser, YAML by default.

    Raises:
        NotFoundError: If ``root`` does not exist.
        InvalidArgumentError: If ``root`` is not a readable directory.
        CompileError: If ``template`` is malformed.
    """
    config = config or QueryConfig()
    if defaults_file_name is not None:
        config = QueryConfig(
            defaults_file_name=defaults_file_name,
            encoding=config.encoding,
            delimiter=config.delimiter,
        )

    if isinstance(root, str) and not root.strip():
        raise NotFoundError("Invalid data directory: ''")
    root = Path(root)
    _check_root(root)
    pattern = compile_template(template.strip("/"))

    resolver = DocumentResolver(pattern, root, config=config, parser=parser)
    paths = find_document_paths(resolver, config.defaults_file_name)
    LOGGER.info("Found %d document(s) in %s matching %r", len(paths), root, pattern.template)
    return Collection(paths, resolver)
