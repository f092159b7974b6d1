"""Utility helpers for working with files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator


def iter_file_paths(root: Path) -> Iterator[Path]:
    """Yield every regular file beneath ``root``, recursively, in no particular order."""
    for item in Path(root).rglob("*"):
        if item.is_file():
            yield item


def relative_posix(path: Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` as a POSIX string.

    Raises:
        ValueError: If ``path`` is not inside ``root``.
    """
    return Path(path).relative_to(root).as_posix()


def directory_chain(root: Path, path: Path) -> list[Path]:
    """Directories from ``root`` down to the parent of ``path``, root first."""
    relative = Path(path).parent.relative_to(root)
    chain = [Path(root)]
    for part in relative.parts:
        chain.append(chain[-1] / part)
    return chain
