"""Resolve layout names to Jinja2 templates and wrap rendered fragments."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import jinja2

from ..content.loader import (
    FRONT_MATTER_DELIMITER,
    is_plain_layout_name,
    normalize_layout_name,
    split_front_matter,
)
from ..core.errors import BuildError, IOFailure, LayoutCycle, LayoutNotFound, MalformedFrontMatter

logger = logging.getLogger(__name__)

LAYOUT_SUFFIX = ".html"


@dataclass(frozen=True)
class Layout:
    """A page skeleton with a single ``{{ content }}`` insertion point.

    Attributes:
        name: Layout name as referenced from front matter
        template: Jinja2 template source
        parent: Name of the layout this one is nested in, if any
        metadata: Remaining keys from the layout's own front matter
        path: File the layout was loaded from
    """

    name: str
    template: str
    parent: str | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)
    path: Path | None = field(default=None, compare=False)


class LayoutResolver:
    """Looks up layouts by name and substitutes rendered content into them.

    Layouts are ``<name>.html`` files in the search paths, using Jinja2
    syntax. The template receives:

    - ``content``: the rendered fragment (inserted as-is, not escaped)
    - ``page``: the document's front matter
    - ``site``: the site configuration
    - ``layout``: the layout's own front matter

    A layout can nest inside another by starting with front matter:
    ```html
    ---
    layout: default
    ---
    <article>{{ content }}</article>
    ```
    The article is rendered first and becomes ``content`` of ``default``.
    """

    def __init__(self, search_paths: list[Path] | None = None) -> None:
        """Initialize resolver with search paths.

        Args:
            search_paths: Directories to search for layout files. Layouts
                registered with load_string() need no search path.
        """
        self.search_paths = [Path(p) for p in (search_paths or [])]
        self._env = jinja2.Environment(
            autoescape=False,
            keep_trailing_newline=True,
            undefined=jinja2.Undefined,
        )
        self._cache: dict[str, Layout] = {}
        self._templates: dict[str, jinja2.Template] = {}

    def get(self, name: str) -> Layout:
        """Get a layout by name.

        Searches for {name}.html in search paths.

        Args:
            name: Layout name (without .html extension)

        Returns:
            Layout instance

        Raises:
            ValueError: If name is not a non-empty string
            LayoutNotFound: If no layout file matches
        """
        if not isinstance(name, str) or not name:
            raise ValueError("Layout name must be a non-empty string")

        if name in self._cache:
            return self._cache[name]

        path = self._find_layout(name)
        if path is None:
            raise LayoutNotFound(name)

        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise IOFailure(path, str(exc)) from exc

        layout = self._parse_layout(name, text, path)
        logger.debug("Loaded layout '%s' from %s", name, path)
        self._cache[name] = layout
        return layout

    def load_string(self, name: str, text: str) -> Layout:
        """Register a layout from a string, replacing any cached layout.

        Args:
            name: Layout name
            text: Template source, optionally with front matter

        Returns:
            The registered Layout
        """
        layout = self._parse_layout(name, text, None)
        self._cache[name] = layout
        self._templates.pop(name, None)
        return layout

    def has(self, name: str) -> bool:
        """Check whether a layout with this name exists."""
        return name in self._cache or self._find_layout(name) is not None

    def resolve(
        self,
        name: str,
        fragment: str,
        page: Mapping[str, Any] | None = None,
        site: Mapping[str, Any] | None = None,
    ) -> str:
        """Wrap a rendered fragment in the named layout.

        Nested layouts are applied innermost first.

        Args:
            name: Layout name
            fragment: Rendered HTML fragment (may be empty)
            page: Front matter of the document being rendered
            site: Site configuration values

        Returns:
            Complete page HTML

        Raises:
            LayoutNotFound: If the layout (or a parent layout) does not exist
            LayoutCycle: If nested layouts reference each other
        """
        page = dict(page or {})
        site = dict(site or {})
        content = fragment
        chain: list[str] = []
        current: str | None = name

        while current is not None:
            if current in chain:
                raise LayoutCycle(chain + [current])
            chain.append(current)

            layout = self.get(current)
            template = self._compile(layout)
            try:
                content = template.render(
                    content=content,
                    page=page,
                    site=site,
                    layout=dict(layout.metadata),
                )
            except jinja2.TemplateError as exc:
                raise BuildError(f"Layout '{layout.name}' failed to render: {exc}") from exc
            current = layout.parent

        return content

    def clear_cache(self) -> None:
        """Clear the layout cache."""
        self._cache.clear()
        self._templates.clear()

    def _find_layout(self, name: str) -> Path | None:
        """Find the layout file for a name."""
        if not is_plain_layout_name(name):
            return None
        for search_path in self.search_paths:
            path = search_path / f"{name}{LAYOUT_SUFFIX}"
            if path.is_file():
                return path
        return None

    def _parse_layout(self, name: str, text: str, path: Path | None) -> Layout:
        """Parse optional front matter off a layout's source."""
        parent = None
        metadata: dict[str, Any] = {}
        first_line = text.lstrip("\ufeff").split("\n", 1)[0].rstrip()
        if first_line == FRONT_MATTER_DELIMITER:
            try:
                metadata, text = split_front_matter(text)
                if "layout" in metadata:
                    parent = normalize_layout_name(metadata.pop("layout"))
            except MalformedFrontMatter as exc:
                # The page being built is attached by the caller
                raise MalformedFrontMatter(f"{exc.reason} (in layout {path or name})") from exc

        return Layout(name=name, template=text, parent=parent, metadata=metadata, path=path)

    def _compile(self, layout: Layout) -> jinja2.Template:
        """Compile a layout's template, caching the result."""
        template = self._templates.get(layout.name)
        if template is None:
            try:
                template = self._env.from_string(layout.template)
            except jinja2.TemplateSyntaxError as exc:
                where = f" ({layout.path})" if layout.path is not None else ""
                raise BuildError(
                    f"Layout '{layout.name}'{where} has invalid template syntax: {exc}"
                ) from exc
            self._templates[layout.name] = template
        return template
