"""Error types raised while building a site.

Every error is a BuildError, so callers can catch one type and still report
the offending document path.
"""

from __future__ import annotations

from pathlib import Path


class BuildError(Exception):
    """Base class for all build failures.

    Attributes:
        document: Path or identifier of the document being built, if known
    """

    def __init__(self, message: str, document: str | Path | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.document = document

    def __str__(self) -> str:
        if self.document is None:
            return self.message
        return f"{self.document}: {self.message}"

    def with_document(self, document: str | Path) -> BuildError:
        """Attach the offending document if it was not already set.

        Returns:
            The same error, for re-raising
        """
        if self.document is None:
            self.document = document
        return self


class LayoutNotFound(BuildError):
    """A document (or layout) references a layout that does not exist."""

    def __init__(self, layout: str, document: str | Path | None = None) -> None:
        super().__init__(f"Layout '{layout}' not found", document)
        self.layout = layout


class LayoutCycle(BuildError):
    """Nested layouts reference each other."""

    def __init__(self, chain: list[str], document: str | Path | None = None) -> None:
        super().__init__(f"Layout cycle: {' -> '.join(chain)}", document)
        self.chain = chain


class MalformedFrontMatter(BuildError):
    """The front matter block is missing or cannot be parsed."""

    def __init__(self, reason: str, document: str | Path | None = None) -> None:
        super().__init__(f"Malformed front matter: {reason}", document)
        self.reason = reason


class IOFailure(BuildError):
    """A source could not be read or an output could not be written."""

    def __init__(self, path: str | Path, reason: str, document: str | Path | None = None) -> None:
        super().__init__(f"I/O failure on {path}: {reason}", document)
        self.path = Path(path)
        self.reason = reason
