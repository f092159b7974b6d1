"""YAML metadata block parsing.

The block between the ``---`` delimiter lines is handed to PyYAML's
``safe_load``. An empty block yields an empty field map; a block that is not
a mapping, or is not valid YAML, raises :class:`MetadataSyntaxError`.
"""

from __future__ import annotations

from typing import Protocol

import yaml

from docquery.errors import MetadataSyntaxError
from docquery.models import FieldMap


class MetadataParser(Protocol):
    def __call__(self, block: str) -> FieldMap:
        ...


def parse_yaml_metadata(block: str) -> FieldMap:
    """Parse a YAML metadata block into a field map."""
    if not block.strip():
        return {}
    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as exc:
        raise MetadataSyntaxError(f"Invalid YAML metadata: {exc}", preview=block[:200]) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MetadataSyntaxError(
            f"Metadata must be a mapping, got {type(data).__name__}", preview=block[:200]
        )
    return {str(key): value for key, value in data.items()}
