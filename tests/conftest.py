"""Shared fixtures for building small sites in a temporary directory."""

from pathlib import Path

import pytest

PAGE_LAYOUT = "<html><body>{{ content }}</body></html>"


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def write():
    """Write a file, creating parent directories."""
    return _write


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """A source directory with a single 'page' layout and no documents."""
    source = tmp_path / "src"
    _write(source / "_layouts" / "page.html", PAGE_LAYOUT)
    return source


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """An output directory that does not exist yet."""
    return tmp_path / "out"
