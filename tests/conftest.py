"""Shared fixtures: small document trees written under ``tmp_path``."""

from __future__ import annotations

from pathlib import Path

import pytest


def write(root: Path, relative: str, text: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def baseline_dir(tmp_path: Path) -> Path:
    """Three plain documents named ``NN-title.md``."""
    root = tmp_path / "data"
    write(root, "01-foo.md", "foo\n")
    write(root, "02-bar.md", "bar\n")
    write(root, "03-baz.md", "baz\n")
    return root


@pytest.fixture
def cascade_dir(tmp_path: Path) -> Path:
    """Documents with metadata blocks, a root defaults file and a nested one."""
    root = tmp_path / "fixtures"
    write(root, "_defaults.md", "---\ntag: default tag\n---\ndefault content\n")
    write(root, "0 - foo.md", "---\nrank: 3\nsubtitle: foo title\n---\nfoo content\n")
    write(root, "1 - bar.md", "---\nrank: 1\ntag: bar tag\n---\n")
    write(root, "2 - baz.md", "---\nrank: 2\n---\n\nbaz content\n")
    write(root, "notes.txt", "not a document")
    return root


@pytest.fixture
def dated_dir(tmp_path: Path) -> Path:
    """Documents laid out as ``YYYY/MM/DD-title.md`` with per-year defaults."""
    root = tmp_path / "posts"
    write(root, "_defaults.md", "---\nauthor: admin\nlayout: post\n---\n")
    write(root, "2014/_defaults.md", "---\nauthor: alice\n---\nplaceholder\n")
    write(root, "2014/01/01-foo.md", "---\ntitle_case: Foo\n---\nfoo content\n")
    write(root, "2014/01/02-bar.md", "")
    write(root, "2015/03/10-baz.md", "baz content")
    write(root, "2015/readme.md", "not matched")
    return root
