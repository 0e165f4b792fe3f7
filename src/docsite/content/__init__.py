"""Content store: markdown documents with front matter."""

from .loader import DocumentLoader, split_front_matter

__all__ = ["DocumentLoader", "split_front_matter"]
