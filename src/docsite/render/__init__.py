"""Content rendering."""

from .markdown import MarkdownRenderer

__all__ = ["MarkdownRenderer"]
