"""Load content documents from markdown files with YAML front matter."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable

import yaml

from ..core.document import Document
from ..core.errors import IOFailure, MalformedFrontMatter

logger = logging.getLogger(__name__)

# Suffixes recognised as content documents
CONTENT_SUFFIXES = (".md", ".markdown")

FRONT_MATTER_DELIMITER = "---"
# YAML's document end marker is also accepted as a closing delimiter
FRONT_MATTER_END_MARKERS = ("---", "...")


def split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Split a document into its parsed front matter and its body.

    The front matter block must open on the very first line with ``---`` and
    close with a line holding ``---`` (or ``...``). Its contents are parsed as
    a YAML mapping; an empty block gives an empty mapping.

    Args:
        text: Full document text

    Returns:
        Tuple of (front matter mapping, body text)

    Raises:
        MalformedFrontMatter: If the block is missing, unterminated, not valid
            YAML, or not a mapping
    """
    text = text.lstrip("\ufeff")
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != FRONT_MATTER_DELIMITER:
        raise MalformedFrontMatter("document does not start with a '---' block")

    for end, line in enumerate(lines[1:], start=1):
        if line.rstrip() in FRONT_MATTER_END_MARKERS:
            break
    else:
        raise MalformedFrontMatter("front matter block is not terminated")

    raw = "".join(lines[1:end])
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise MalformedFrontMatter(f"invalid YAML ({exc})") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise MalformedFrontMatter(f"expected a mapping, got {type(data).__name__}")

    body = "".join(lines[end + 1:])
    return data, body


def normalize_layout_name(value: Any) -> str:
    """Validate a front matter ``layout`` value and strip any ``.html`` suffix."""
    if not isinstance(value, str):
        raise MalformedFrontMatter("'layout' must be a string")
    name = value.strip()
    if name.endswith(".html"):
        name = name[: -len(".html")]
    if not name:
        raise MalformedFrontMatter("'layout' must not be empty")
    if not is_plain_layout_name(name):
        raise MalformedFrontMatter(f"'layout' must be a bare name, not a path: {value!r}")
    return name


def is_plain_layout_name(name: str) -> bool:
    """True if a layout name can't reach outside the layout directory."""
    return "/" not in name and "\\" not in name and name not in (".", "..")


class DocumentLoader:
    """Loads content documents from markdown files.

    File format:
    ```markdown
    ---
    layout: page
    title: Generators
    ---
    ## Generators

    A generator is a function that ...
    ```

    Every key in the front matter is kept on the document and exposed to the
    layout as ``page``. Only ``layout`` is required.
    """

    def __init__(self, exclude: Iterable[str] | None = None) -> None:
        """Initialize the loader.

        Args:
            exclude: Paths relative to the source root to skip during
                discovery. A directory entry skips everything below it.
        """
        self.exclude = tuple(p.strip("/") for p in (exclude or ()))

    def parse(self, text: str, identifier: str, source_path: Path | None = None) -> Document:
        """Parse a document from its full text.

        Args:
            text: Document text, front matter included
            identifier: Slug for the document (e.g. ``python/generators``)
            source_path: File the text was read from, for error reporting

        Returns:
            Document instance

        Raises:
            MalformedFrontMatter: If front matter is missing, unparsable, or has
                no usable ``layout`` key
        """
        label = source_path if source_path is not None else identifier
        try:
            front_matter, body = split_front_matter(text)
            if "layout" not in front_matter:
                raise MalformedFrontMatter("missing 'layout' key")
            layout = normalize_layout_name(front_matter["layout"])
        except MalformedFrontMatter as exc:
            raise exc.with_document(label)

        return Document(
            identifier=identifier,
            layout=layout,
            body=body,
            front_matter=front_matter,
            source_path=source_path,
        )

    def load(self, path: str | Path, root: str | Path | None = None) -> Document:
        """Load a document from a file.

        Args:
            path: Path to the markdown file
            root: Source root the identifier is relative to. Defaults to the
                file's own directory.

        Returns:
            Document instance

        Raises:
            IOFailure: If the file cannot be read
            MalformedFrontMatter: If the front matter is invalid
        """
        path = Path(path)
        root = Path(root) if root is not None else path.parent
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise IOFailure(path, str(exc), document=path) from exc

        identifier = path.relative_to(root).with_suffix("").as_posix()
        logger.debug("Loaded %s as '%s'", path, identifier)
        return self.parse(text, identifier, source_path=path)

    def discover(self, root: str | Path) -> list[Path]:
        """Find all content documents under a source directory.

        Directories and files whose names start with ``_`` or ``.`` are
        skipped (layouts, site config, hidden files), as are excluded paths.

        Args:
            root: Source directory

        Returns:
            Sorted list of document paths

        Raises:
            IOFailure: If the source directory does not exist
        """
        root = Path(root)
        if not root.is_dir():
            raise IOFailure(root, "source directory does not exist")

        found = []
        for path in root.rglob("*"):
            if path.suffix.lower() not in CONTENT_SUFFIXES or not path.is_file():
                continue
            rel = path.relative_to(root)
            if any(part.startswith(("_", ".")) for part in rel.parts):
                continue
            if self._is_excluded(rel.as_posix()):
                logger.debug("Excluded %s", rel)
                continue
            found.append(path)

        return sorted(found)

    def _is_excluded(self, rel: str) -> bool:
        """Check a root-relative POSIX path against the exclude list."""
        return any(rel == entry or rel.startswith(f"{entry}/") for entry in self.exclude)
