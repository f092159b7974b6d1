"""Lazy, rewindable document pipeline.

A :class:`Collection` holds the matched file paths of a query together with
the filter, map and sort stages registered on it. Documents are resolved on
demand; nothing is cached across pulls except filter verdicts.

Stage semantics:

* map stages apply to every document produced after they are registered,
  in registration order;
* filter stages take effect from the next :meth:`Collection.rewind` and run
  at most once per candidate;
* sort stages are drained at the next rewind, each one re-sorting the
  already sorted sequence.

Index access, ``len`` and :meth:`Collection.paths` see every registered
stage. Outside a pass they settle the pipeline as a rewind would; during a
pass they work on a copy so the cursor keeps its order.

A collection is single-owner and single-consumer; it is not thread safe.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from functools import cmp_to_key
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from docquery.errors import IndexOutOfBoundsError, InvalidArgumentError
from docquery.index.resolver import DocumentResolver
from docquery.models import Document
from docquery.utils.text import compare_values, natural_sort_key

LOGGER = logging.getLogger(__name__)

Predicate = Callable[[Document], object]
Transform = Callable[[Document], Document]
Comparator = Callable[[Document, Document], int]


class CollectionState(str, enum.Enum):
    BUILT = "built"
    ITERATING = "iterating"
    EXHAUSTED = "exhausted"


class SortOrder(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def coerce(cls, value: object) -> "SortOrder":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        raise InvalidArgumentError(f"Invalid sort order: {value!r}")


@dataclass(frozen=True)
class FilterStage:
    predicate: Predicate

    def accepts(self, document: Document) -> bool:
        return bool(self.predicate(document))


@dataclass(frozen=True)
class MapStage:
    transform: Transform

    def apply(self, document: Document) -> Document:
        result = self.transform(document)
        if not isinstance(result, Document):
            raise InvalidArgumentError(
                f"Map callback must return a Document, got {type(result).__name__}"
            )
        return result


@dataclass(frozen=True)
class SortStage:
    comparator: Comparator

    def compare(self, left: Document, right: Document) -> int:
        return self.comparator(left, right)


def field_comparator(field_name: str, order: SortOrder) -> Comparator:
    """Comparator on a named field, numeric when both values are numeric."""

    def compare(left: Document, right: Document) -> int:
        result = compare_values(left.get_field(field_name), right.get_field(field_name))
        return -result if order is SortOrder.DESC else result

    return compare


def _reversed(comparator: Comparator) -> Comparator:
    def compare(left: Document, right: Document) -> int:
        return -comparator(left, right)

    return compare


class Collection:
    """Documents matched by a query, with chainable filter, map and sort stages."""

    def __init__(self, paths: Iterable[Path], resolver: DocumentResolver) -> None:
        self._paths: List[Path] = sort_paths([Path(path) for path in paths])
        self._resolver = resolver
        self._stages: List[Union[FilterStage, MapStage]] = []
        self._pending_sorts: List[SortStage] = []
        # number of leading stages whose filters are in force
        self._active = 0
        # number of leading stages each surviving path has already been checked against
        self._checked: Dict[Path, int] = {}
        # index of the filter stage that rejected each path
        self._rejected: Dict[Path, int] = {}
        self._position = 0
        self._started = False

    @property
    def root(self) -> Path:
        return self._resolver.root

    @property
    def state(self) -> CollectionState:
        if not self._started:
            return CollectionState.BUILT
        if self._position >= len(self._paths):
            return CollectionState.EXHAUSTED
        return CollectionState.ITERATING

    def filter(self, predicate: Predicate) -> "Collection":
        """Exclude documents for which ``predicate`` returns a falsy value."""
        if not callable(predicate):
            raise InvalidArgumentError("Filter callback must be callable")
        self._stages.append(FilterStage(predicate))
        return self

    def map(self, transform: Transform) -> "Collection":
        """Replace each document with ``transform(document)``."""
        if not callable(transform):
            raise InvalidArgumentError("Map callback must be callable")
        self._stages.append(MapStage(transform))
        return self

    def sort(self, by: Union[str, Comparator], order: Union[SortOrder, str] = SortOrder.ASC) -> "Collection":
        """Sort by a comparator or by a field name.

        A comparator takes two documents and returns a negative number, zero
        or a positive number. A field sort compares numerically when both
        values are numeric and naturally, ignoring case, otherwise.
        ``SortOrder.DESC`` reverses either kind.
        """
        order = SortOrder.coerce(order)
        if isinstance(by, str):
            comparator = field_comparator(by, order)
        elif callable(by):
            comparator = by if order is SortOrder.ASC else _reversed(by)
        else:
            raise InvalidArgumentError("Sort callback must be callable or a field name")
        self._pending_sorts.append(SortStage(comparator))
        return self

    def rewind(self) -> None:
        """Apply pending stages and move the cursor back to the first document."""
        self._settle()
        self._position = 0
        self._started = True

    def next_document(self) -> Optional[Document]:
        """Advance the cursor and return the next document, or ``None`` when exhausted."""
        while self._position < len(self._paths):
            path = self._paths[self._position]
            self._position += 1
            document = self._materialize(path)
            if document is not None:
                return document
        return None

    def __iter__(self) -> Iterator[Document]:
        self.rewind()
        return self._pull()

    def _pull(self) -> Iterator[Document]:
        while True:
            document = self.next_document()
            if document is None:
                return
            yield document

    def __len__(self) -> int:
        return len(self.paths())

    def to_list(self) -> List[Document]:
        """Rewind and resolve every document in order."""
        documents = []
        for document in self:
            documents.append(document)
        return documents

    def paths(self) -> List[Path]:
        """File paths of the documents in the current filtered and sorted order."""
        paths, active = self._settled()
        return [path for path in paths if self._accepts(path, active)]

    def get_document(self, index: int) -> Document:
        """Resolve the document at ``index`` in the current filtered and sorted order."""
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidArgumentError(f"Invalid index: {index!r}")
        paths, active = self._settled()
        paths = [path for path in paths if self._accepts(path, active)]
        if index < 0 or index >= len(paths):
            raise IndexOutOfBoundsError(f"Invalid index: {index}")
        return self._materialize(paths[index], active)

    def __getitem__(self, index: int) -> Document:
        return self.get_document(index)

    def _settled(self) -> Tuple[List[Path], int]:
        """Candidate order and number of stages in force once pending stages apply.

        While a pass is in progress the cursor keeps its own order and
        filters; the settled view is then computed on a copy.
        """
        if self._started and 0 < self._position < len(self._paths):
            active = len(self._stages)
            return self._sorted(self._paths, active, self._pending_sorts), active
        self._settle()
        return self._paths, self._active

    def _settle(self) -> None:
        self._active = len(self._stages)
        if self._pending_sorts:
            self._paths = self._sorted(self._paths, self._active, self._pending_sorts)
            self._pending_sorts.clear()

    def _sorted(self, paths: Sequence[Path], active: int, sorts: Sequence[SortStage]) -> List[Path]:
        if not sorts:
            return list(paths)
        entries = []
        for path in paths:
            document = self._materialize(path, active)
            if document is not None:
                entries.append((path, document))
        for stage in sorts:
            entries.sort(key=cmp_to_key(lambda left, right, stage=stage: stage.compare(left[1], right[1])))
        LOGGER.debug("Applied %d sort stage(s) to %d document(s)", len(sorts), len(entries))
        return [path for path, _ in entries]

    def _accepts(self, path: Path, active: int) -> bool:
        rejected_at = self._rejected.get(path)
        if rejected_at is not None:
            return rejected_at >= active
        if self._checked.get(path, 0) >= active:
            return True
        return self._materialize(path, active) is not None

    def _materialize(self, path: Path, active: Optional[int] = None) -> Optional[Document]:
        """Resolve ``path`` through the stages, or return ``None`` if a filter in force rejects it."""
        if active is None:
            active = self._active
        rejected_at = self._rejected.get(path)
        if rejected_at is not None and rejected_at < active:
            return None
        checked = self._checked.get(path, 0)
        document = self._resolver.resolve(path)
        for index, stage in enumerate(self._stages):
            if isinstance(stage, MapStage):
                document = stage.apply(document)
            elif checked <= index < active and not stage.accepts(document):
                self._rejected[path] = index
                self._checked[path] = index
                return None
        self._checked[path] = max(checked, active)
        return document

    def __repr__(self) -> str:
        return f"Collection({len(self._paths)} path(s), {len(self._stages)} stage(s))"


def sort_paths(paths: Sequence[Path]) -> List[Path]:
    """Natural, case-insensitive ascending order on the full path."""
    return sorted(paths, key=lambda path: natural_sort_key(str(path)))
