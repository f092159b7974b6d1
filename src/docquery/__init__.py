"""Query a directory of text files like a document database."""

from docquery.config import QueryConfig
from docquery.errors import (
    CompileError,
    DocQueryError,
    IndexOutOfBoundsError,
    InvalidArgumentError,
    MetadataSyntaxError,
    NotFoundError,
    UndeclaredFieldError,
    UnmatchedPathError,
)
from docquery.index.collection import Collection, SortOrder
from docquery.index.finder import query
from docquery.models import Document
from docquery.pattern.template import PathPattern, compile_template

ASC = SortOrder.ASC
DESC = SortOrder.DESC

__all__ = [
    "ASC",
    "DESC",
    "Collection",
    "CompileError",
    "DocQueryError",
    "Document",
    "IndexOutOfBoundsError",
    "InvalidArgumentError",
    "MetadataSyntaxError",
    "NotFoundError",
    "PathPattern",
    "QueryConfig",
    "SortOrder",
    "UndeclaredFieldError",
    "UnmatchedPathError",
    "compile_template",
    "query",
]
