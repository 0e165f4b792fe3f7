"""Docsite - a static site generator for markdown pages with HTML layouts."""

from .content import DocumentLoader
from .core import BuildError, Document, IOFailure, LayoutCycle, LayoutNotFound, MalformedFrontMatter
from .layout import Layout, LayoutResolver
from .render import MarkdownRenderer
from .site import BuildReport, SiteBuilder

__version__ = "0.1.0"

__all__ = [
    "BuildError",
    "BuildReport",
    "Document",
    "DocumentLoader",
    "IOFailure",
    "Layout",
    "LayoutCycle",
    "LayoutNotFound",
    "LayoutResolver",
    "MalformedFrontMatter",
    "MarkdownRenderer",
    "SiteBuilder",
]
