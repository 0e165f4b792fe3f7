"""Core types shared by the loader, resolver and builder."""

from .document import Document
from .errors import BuildError, IOFailure, LayoutCycle, LayoutNotFound, MalformedFrontMatter

__all__ = [
    "Document",
    "BuildError",
    "IOFailure",
    "LayoutCycle",
    "LayoutNotFound",
    "MalformedFrontMatter",
]
