"""Core docquery data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

from docquery.errors import UndeclaredFieldError

# int, float, str or a nested FieldMap; YAML blocks may also yield lists, dates and booleans.
FieldValue = Any
FieldMap = Dict[str, FieldValue]


@dataclass(slots=True)
class Document:
    """A file resolved into typed fields and free-text content.

    ``path`` identifies the document and is read-only; ``fields`` and
    ``content`` may be replaced by map callbacks.
    """

    _path: Path
    fields: FieldMap = field(default_factory=dict)
    content: str = ""

    @property
    def path(self) -> Path:
        return self._path

    def get_file_path(self) -> Path:
        return self.path

    def has_fields(self) -> bool:
        return bool(self.fields)

    def get_fields(self) -> FieldMap:
        return self.fields

    def has_field(self, name: str) -> bool:
        return name in self.fields

    def get_field(self, name: str) -> FieldValue:
        """Return the value of ``name``.

        Raises:
            UndeclaredFieldError: If the document has no such field.
        """
        if name not in self.fields:
            raise UndeclaredFieldError(name)
        return self.fields[name]

    def set_field(self, name: str, value: FieldValue) -> "Document":
        """Set ``name`` to ``value``; a ``None`` value removes the field."""
        if value is None:
            self.fields.pop(name, None)
        else:
            self.fields[name] = value
        return self

    def has_content(self) -> bool:
        return self.content != ""

    def get_content(self) -> str:
        return self.content

    def set_content(self, content: str) -> "Document":
        self.content = content
        return self
