"""Document class for a single content page."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True)
class Document:
    """A content page: front matter plus a markdown body.

    Documents are immutable once read. The identifier is the page's path
    relative to the source root, with POSIX separators and no extension,
    so ``python/generators.md`` becomes ``python/generators``.

    Example:
        doc = Document("python/generators", layout="page", body="## Generators")
        doc.output_relpath  # PurePosixPath('python/generators.html')
    """

    identifier: str
    layout: str
    body: str
    front_matter: Mapping[str, Any] = field(default_factory=dict)
    source_path: Path | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.layout, str) or not self.layout:
            raise ValueError("Document layout must be a non-empty string")
        # Freeze a copy so templates can't mutate the parsed front matter
        object.__setattr__(self, "front_matter", MappingProxyType(dict(self.front_matter)))

    @property
    def title(self) -> str | None:
        """Page title from front matter, if present."""
        title = self.front_matter.get("title")
        return None if title is None else str(title)

    @property
    def output_relpath(self) -> PurePosixPath:
        """Output path relative to the output directory."""
        return PurePosixPath(f"{self.identifier}.html")

    @property
    def label(self) -> str:
        """Name to use when reporting errors for this document."""
        return str(self.source_path) if self.source_path is not None else self.identifier
