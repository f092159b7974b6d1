"""Command line interface for docquery."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from docquery.config import QueryConfig
from docquery.errors import DocQueryError
from docquery.index.collection import Collection, SortOrder
from docquery.index.finder import query
from docquery.models import Document
from docquery.utils.files import relative_posix
from docquery.utils.text import snippet


console = Console()
app = typer.Typer(help="docquery - query a directory of text files like a document database")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _parse_where(clauses: List[str]) -> List[tuple[str, str]]:
    parsed = []
    for clause in clauses:
        name, sep, value = clause.partition("=")
        if not sep or not name.strip():
            raise typer.BadParameter(f"Expected NAME=VALUE, got {clause!r}")
        parsed.append((name.strip(), value.strip()))
    return parsed


def _where_predicate(name: str, value: str):
    def predicate(document: Document) -> bool:
        return document.has_field(name) and str(document.get_field(name)) == value

    return predicate


def _open(
    root: Path,
    template: str,
    defaults: str,
    sort: Optional[str],
    desc: bool,
    where: List[str],
) -> Collection:
    config = QueryConfig(defaults_file_name=defaults)
    try:
        collection = query(config.resolve_root(root, Path.cwd()), template, config=config)
    except DocQueryError as exc:
        raise typer.BadParameter(str(exc)) from exc
    for name, value in _parse_where(where):
        collection.filter(_where_predicate(name, value))
    if sort:
        collection.sort(sort, SortOrder.DESC if desc else SortOrder.ASC)
    return collection


def _display_path(path: Path, root: Path) -> str:
    try:
        return relative_posix(path, root)
    except ValueError:
        return str(path)


def _format_fields(document: Document) -> str:
    return ", ".join(f"{name}={value}" for name, value in document.get_fields().items())


@app.command("list")
def list_documents(
    root: Path = typer.Argument(..., help="Directory holding the documents."),
    template: str = typer.Argument(..., help="Path template, e.g. '{{ order: d }}-{{ title: s }}.md'."),
    sort: Optional[str] = typer.Option(None, "--sort", help="Field to sort by"),
    desc: bool = typer.Option(False, "--desc", help="Sort in descending order"),
    where: List[str] = typer.Option([], "--where", help="Keep documents whose field equals a value (NAME=VALUE)"),
    defaults: str = typer.Option(QueryConfig().defaults_file_name, "--defaults", help="Defaults file name"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """List the documents matching a path template."""
    _setup_logging(verbose)
    collection = _open(root, template, defaults, sort, desc, where)
    try:
        documents = collection.to_list()
    except DocQueryError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if not documents:
        console.print("[yellow]No documents found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#")
    table.add_column("Document")
    table.add_column("Fields")
    table.add_column("Content")

    for index, document in enumerate(documents):
        table.add_row(
            str(index),
            escape(_display_path(document.path, collection.root)),
            escape(_format_fields(document)),
            escape(snippet(document.content)),
        )

    console.print(table)


@app.command()
def show(
    root: Path = typer.Argument(..., help="Directory holding the documents."),
    template: str = typer.Argument(..., help="Path template."),
    index: int = typer.Argument(..., help="Position of the document in the result."),
    sort: Optional[str] = typer.Option(None, "--sort", help="Field to sort by"),
    desc: bool = typer.Option(False, "--desc", help="Sort in descending order"),
    defaults: str = typer.Option(QueryConfig().defaults_file_name, "--defaults", help="Defaults file name"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show a single document."""
    _setup_logging(verbose)
    collection = _open(root, template, defaults, sort, desc, [])
    try:
        document = collection.get_document(index)
    except DocQueryError as exc:
        raise typer.BadParameter(str(exc)) from exc

    console.print(f"[bold]{escape(str(document.path))}[/bold]")
    for name, value in document.get_fields().items():
        console.print(f"  {name}: {value}", markup=False)
    if document.has_content():
        console.print()
        console.print(document.content, markup=False)
