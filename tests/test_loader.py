"""Tests for front matter parsing and document discovery."""

from pathlib import Path

import pytest

from docsite.content import DocumentLoader, split_front_matter
from docsite.core import Document, IOFailure, MalformedFrontMatter


def test_split_front_matter():
    """Front matter is parsed as YAML and the body follows the closing line."""
    data, body = split_front_matter("---\nlayout: page\ntitle: Generators\n---\n## Generators\n")
    assert data == {"layout": "page", "title": "Generators"}
    assert body == "## Generators\n"


def test_split_front_matter_accepts_yaml_end_marker():
    data, body = split_front_matter("---\nlayout: page\n...\nHello")
    assert data == {"layout": "page"}
    assert body == "Hello"


def test_empty_front_matter_is_empty_mapping():
    data, body = split_front_matter("---\n---\nHello")
    assert data == {}
    assert body == "Hello"


@pytest.mark.parametrize(
    "text",
    [
        "## Generators\n\nHello",
        "",
        "\n---\nlayout: page\n---\nHello",
        "---\nlayout: page\nHello",
        "---\nlayout: [page\n---\nHello",
        "---\n- page\n---\nHello",
    ],
    ids=["no-block", "empty", "not-first-line", "unterminated", "bad-yaml", "not-mapping"],
)
def test_malformed_front_matter(text):
    with pytest.raises(MalformedFrontMatter):
        split_front_matter(text)


def test_parse_document():
    loader = DocumentLoader()
    doc = loader.parse("---\nlayout: page\ntitle: Generators\n---\nHello\n", "python/generators")

    assert doc.identifier == "python/generators"
    assert doc.layout == "page"
    assert doc.body == "Hello\n"
    assert doc.title == "Generators"
    assert doc.front_matter["title"] == "Generators"
    assert str(doc.output_relpath) == "python/generators.html"


def test_layout_html_suffix_is_stripped():
    doc = DocumentLoader().parse("---\nlayout: page.html\n---\n", "index")
    assert doc.layout == "page"


@pytest.mark.parametrize(
    "front_matter",
    ["title: No layout", "layout: ''", "layout: 3", "layout: [page]"],
)
def test_parse_rejects_missing_or_bad_layout(front_matter):
    with pytest.raises(MalformedFrontMatter) as excinfo:
        DocumentLoader().parse(f"---\n{front_matter}\n---\nHello", "broken")
    assert excinfo.value.document == "broken"
    assert str(excinfo.value).startswith("broken: ")


def test_document_without_front_matter_names_its_path(tmp_path: Path, write):
    path = write(tmp_path / "notes.md", "Just text, no front matter.")
    with pytest.raises(MalformedFrontMatter) as excinfo:
        DocumentLoader().load(path, tmp_path)
    assert excinfo.value.document == path


def test_document_is_immutable():
    doc = Document("index", layout="page", body="Hello", front_matter={"title": "Home"})
    with pytest.raises(AttributeError):
        doc.body = "changed"
    with pytest.raises(TypeError):
        doc.front_matter["title"] = "changed"


def test_document_requires_layout():
    with pytest.raises(ValueError):
        Document("index", layout="", body="Hello")


def test_load_uses_path_relative_to_root(tmp_path: Path, write):
    path = write(tmp_path / "python" / "generators.md", "---\nlayout: page\n---\nHello")
    doc = DocumentLoader().load(path, tmp_path)

    assert doc.identifier == "python/generators"
    assert doc.source_path == path


def test_load_missing_file_raises_io_failure(tmp_path: Path):
    with pytest.raises(IOFailure):
        DocumentLoader().load(tmp_path / "missing.md", tmp_path)


def test_discover(tmp_path: Path, write):
    for rel in [
        "index.md",
        "python/generators.md",
        "python/decorators.markdown",
        "python/notes.txt",
        "_layouts/page.md",
        "_drafts/wip.md",
        ".hidden/secret.md",
        "drafts/idea.md",
        "README.md",
    ]:
        write(tmp_path / rel, "---\nlayout: page\n---\n")

    loader = DocumentLoader(exclude=["drafts/", "README.md"])
    found = [p.relative_to(tmp_path).as_posix() for p in loader.discover(tmp_path)]

    assert found == ["index.md", "python/decorators.markdown", "python/generators.md"]


def test_discover_missing_source_raises_io_failure(tmp_path: Path):
    with pytest.raises(IOFailure):
        DocumentLoader().discover(tmp_path / "missing")


@pytest.mark.parametrize("layout", ["../../x", "partials/page", "..\\x", ".."])
def test_layout_must_be_a_bare_name(layout):
    with pytest.raises(MalformedFrontMatter):
        DocumentLoader().parse(f"---\nlayout: '{layout}'\n---\nHello", "index")
