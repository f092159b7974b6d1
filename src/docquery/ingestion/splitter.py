"""Split raw file text into a metadata block and content."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Tuple, Union

from docquery.config import METADATA_DELIMITER
from docquery.errors import MetadataSyntaxError
from docquery.models import FieldMap

LOGGER = logging.getLogger(__name__)


def split_metadata_text(
    raw: Union[bytes, str], *, delimiter: str = METADATA_DELIMITER, encoding: str = "utf-8"
) -> Tuple[str, str]:
    """Return ``(metadata_block, content)`` for the raw text of a file.

    A block is recognised when the first non-blank line is ``delimiter``; it
    runs up to the next delimiter line, or to the end of the file when no
    closing delimiter follows (the content is then empty). Content is
    stripped of surrounding whitespace.
    """
    if isinstance(raw, bytes):
        raw = raw.decode(encoding)
    text = raw.lstrip("\ufeff").strip()
    lines = text.splitlines()

    if not lines or lines[0].rstrip() != delimiter:
        return "", text

    block: list[str] = []
    for index, line in enumerate(lines[1:], start=1):
        if line.rstrip() == delimiter:
            content = "\n".join(lines[index + 1 :]).strip()
            return "\n".join(block), content
        block.append(line)
    return "\n".join(block), ""


def read_file_parts(
    path: Path, *, delimiter: str = METADATA_DELIMITER, encoding: str = "utf-8"
) -> Tuple[str, str]:
    """Read ``path`` and split it; a missing, unreadable or undecodable file yields empty parts."""
    try:
        text = Path(path).read_bytes().decode(encoding)
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.debug("Treating unreadable file %s as empty: %s", path, exc)
        return "", ""
    return split_metadata_text(text, delimiter=delimiter, encoding=encoding)


def parse_file(
    path: Path,
    parser: Callable[[str], FieldMap],
    *,
    delimiter: str = METADATA_DELIMITER,
    encoding: str = "utf-8",
) -> Tuple[FieldMap, str]:
    """Read ``path`` into ``(fields, content)`` using ``parser`` for the metadata block."""
    block, content = read_file_parts(path, delimiter=delimiter, encoding=encoding)
    try:
        fields = parser(block)
    except MetadataSyntaxError as exc:
        if exc.path is not None:
            raise
        raise MetadataSyntaxError(exc.message, path=path, preview=exc.preview) from exc
    return fields, content
