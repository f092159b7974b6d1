"""Path template compiler and typed matcher.

A template mixes literal text with placeholders such as ``{{ order: d }}`` or
``{{ date.year: 4d }}``. Compiling it once yields a :class:`PathPattern` whose
:meth:`~PathPattern.match` extracts a typed field map from a relative path.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence, Tuple, Union

from docquery.errors import CompileError
from docquery.models import FieldMap

OPEN = "{{"
CLOSE = "}}"

_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*\Z")
_TYPE = re.compile(r"(\d*)([A-Za-z]+)\Z")


@dataclass(frozen=True)
class PlaceholderType:
    token: str
    pattern: str
    width_pattern: str
    convert: Callable[[str], object]


# Placeholders never cross a path separator.
PLACEHOLDER_TYPES: Dict[str, PlaceholderType] = {
    "s": PlaceholderType("s", r"[^/]+?", r"[^/]{%d}", str),
    "d": PlaceholderType("d", r"-?\d+?", r"\d{%d}", int),
    "f": PlaceholderType("f", r"-?\d+?(?:\.\d+?)?", r"[-\d.]{%d}", float),
}


@dataclass(frozen=True)
class Literal:
    text: str

    def regex(self) -> str:
        return re.escape(self.text)


@dataclass(frozen=True)
class Placeholder:
    name: str
    kind: PlaceholderType
    width: Optional[int] = None

    @property
    def keys(self) -> Tuple[str, ...]:
        return tuple(self.name.split("."))

    def regex(self) -> str:
        if self.width is None:
            return f"({self.kind.pattern})"
        return f"({self.kind.width_pattern % self.width})"

    def convert(self, captured: str):
        return self.kind.convert(captured)


Segment = Union[Literal, Placeholder]


def _parse_placeholder(body: str, template: str) -> Placeholder:
    name, sep, type_token = body.partition(":")
    name = name.strip()
    type_token = type_token.strip() if sep else "s"
    if not _NAME.match(name):
        raise CompileError(f"Invalid placeholder name {name!r}", template)
    match = _TYPE.match(type_token)
    if match is None or match.group(2) not in PLACEHOLDER_TYPES:
        raise CompileError(f"Unknown type {type_token!r} for placeholder {name!r}", template)
    width = int(match.group(1)) if match.group(1) else None
    if width == 0:
        raise CompileError(f"Zero width for placeholder {name!r}", template)
    return Placeholder(name, PLACEHOLDER_TYPES[match.group(2)], width)


def tokenize(template: str) -> Tuple[Segment, ...]:
    """Split ``template`` into alternating literal and placeholder segments.

    Raises:
        CompileError: On unbalanced braces or a malformed placeholder.
    """
    segments: list[Segment] = []
    position = 0
    while position < len(template):
        start = template.find(OPEN, position)
        literal = template[position:] if start == -1 else template[position:start]
        if CLOSE in literal:
            raise CompileError(f"Unbalanced {CLOSE!r}", template)
        if literal:
            segments.append(Literal(literal))
        if start == -1:
            break
        end = template.find(CLOSE, start + len(OPEN))
        if end == -1:
            raise CompileError(f"Unbalanced {OPEN!r}", template)
        body = template[start + len(OPEN) : end]
        if OPEN in body:
            raise CompileError(f"Nested {OPEN!r}", template)
        segments.append(_parse_placeholder(body, template))
        position = end + len(CLOSE)
    return tuple(segments)


def _check_names(placeholders: Sequence[Placeholder], template: str) -> None:
    leaves: set[str] = set()
    branches: set[str] = set()
    for placeholder in placeholders:
        name = placeholder.name
        if name in leaves:
            raise CompileError(f"Duplicate placeholder {name!r}", template)
        if name in branches:
            raise CompileError(f"Placeholder {name!r} is also a nested field", template)
        keys = placeholder.keys
        for depth in range(1, len(keys)):
            prefix = ".".join(keys[:depth])
            if prefix in leaves:
                raise CompileError(f"Placeholder {name!r} nests under field {prefix!r}", template)
            branches.add(prefix)
        leaves.add(name)


class PathPattern:
    """A compiled path template."""

    def __init__(self, template: str, segments: Sequence[Segment]) -> None:
        self.template = template
        self.segments = tuple(segments)
        self.placeholders = tuple(s for s in self.segments if isinstance(s, Placeholder))
        self._regex = re.compile("".join(segment.regex() for segment in self.segments))

    @classmethod
    def compile(cls, template: str) -> "PathPattern":
        segments = tokenize(template)
        placeholders = [s for s in segments if isinstance(s, Placeholder)]
        _check_names(placeholders, template)
        return cls(template, segments)

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(placeholder.name for placeholder in self.placeholders)

    def match(self, path: str) -> Optional[FieldMap]:
        """Extract typed fields from ``path``, or return ``None`` if it does not match.

        The match is all or nothing: a capture that fails to convert to its
        declared type discards the whole attempt.
        """
        found = self._regex.fullmatch(path)
        if found is None:
            return None
        fields: FieldMap = {}
        for placeholder, captured in zip(self.placeholders, found.groups()):
            try:
                value = placeholder.convert(captured)
            except ValueError:
                return None
            *parents, leaf = placeholder.keys
            target = fields
            for key in parents:
                target = target.setdefault(key, {})
            target[leaf] = value
        return fields

    def __repr__(self) -> str:
        return f"PathPattern({self.template!r})"


def compile_template(template: str) -> PathPattern:
    """Compile ``template`` into a :class:`PathPattern`."""
    return PathPattern.compile(template)
