"""Layout system for wrapping rendered pages in shared chrome."""

from .resolver import Layout, LayoutResolver

__all__ = ["Layout", "LayoutResolver"]
