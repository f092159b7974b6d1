"""Exceptions raised by docquery."""

from __future__ import annotations


class DocQueryError(Exception):
    """Base class for every error raised by docquery."""


class CompileError(DocQueryError, ValueError):
    """The path template is malformed."""

    def __init__(self, message: str, template: str | None = None) -> None:
        self.template = template
        if template is not None:
            message = f"{message} (template: {template!r})"
        super().__init__(message)


class InvalidArgumentError(DocQueryError, ValueError):
    """A stage argument or query argument is invalid."""


class NotFoundError(DocQueryError, FileNotFoundError):
    """The query root does not exist."""


class IndexOutOfBoundsError(DocQueryError, IndexError):
    """Index access past the end of the current document sequence."""


class UndeclaredFieldError(DocQueryError, KeyError):
    """A field was requested that the document does not declare."""

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(field_name)

    def __str__(self) -> str:
        return f"Invalid field name '{self.field_name}'"


class MetadataSyntaxError(DocQueryError, ValueError):
    """The metadata block of a file could not be parsed.

    Attributes:
        path: File the block was read from, when known.
        preview: Leading part of the offending block, for debugging.
    """

    def __init__(self, message: str, *, path=None, preview: str | None = None) -> None:
        self.message = message
        self.path = path
        self.preview = preview
        parts = [message]
        if path is not None:
            parts.append(f"in {path}")
        super().__init__(" ".join(parts))


class UnmatchedPathError(DocQueryError, LookupError):
    """A path that does not match the template was handed to the resolver."""
