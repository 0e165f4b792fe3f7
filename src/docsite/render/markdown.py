"""Markdown to HTML fragment rendering."""

from __future__ import annotations

from typing import Sequence

import markdown

DEFAULT_EXTENSIONS = ("fenced_code", "tables")


class MarkdownRenderer:
    """Renders markdown bodies to HTML fragments.

    Rendering is delegated to Python-Markdown. Raw HTML in the body (for
    example an embedded video ``<iframe>``) is passed through unchanged.
    """

    def __init__(self, extensions: Sequence[str] | None = None) -> None:
        """Initialize the renderer.

        Args:
            extensions: Python-Markdown extension names. Defaults to
                fenced code blocks and tables.
        """
        self.extensions = list(DEFAULT_EXTENSIONS if extensions is None else extensions)
        self._md = markdown.Markdown(extensions=self.extensions, output_format="html")

    def render(self, text: str) -> str:
        """Render markdown text to an HTML fragment.

        Args:
            text: Markdown source

        Returns:
            HTML fragment (no surrounding document structure)
        """
        # Extensions keep per-document state between conversions
        self._md.reset()
        return self._md.convert(text)
