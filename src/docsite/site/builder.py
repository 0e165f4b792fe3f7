"""Site builder: renders every document and writes one HTML page per document."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..config import SiteConfig, load_config
from ..content.loader import DocumentLoader
from ..core.document import Document
from ..core.errors import BuildError, IOFailure
from ..layout.resolver import LayoutResolver
from ..render.markdown import MarkdownRenderer

logger = logging.getLogger(__name__)


@dataclass
class BuildFailure:
    """A document that could not be built."""

    path: Path
    error: BuildError

    def __str__(self) -> str:
        return str(self.error.with_document(self.path))


@dataclass
class BuildReport:
    """Outcome of building a site.

    Attributes:
        written: Output files written, in build order
        failures: Documents that failed, with their errors
    """

    written: list[Path] = field(default_factory=list)
    failures: list[BuildFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True if every document was built."""
        return not self.failures


class SiteBuilder:
    """Builds a static site from a source directory.

    Each document goes through the same steps:

    1. **Render**: the markdown body becomes an HTML fragment.
    2. **Resolve**: the layout named in front matter is looked up.
    3. **Substitute**: the fragment replaces the layout's ``{{ content }}``.
    4. **Emit**: the page is written to the mirrored output path,
       ``python/generators.md`` -> ``python/generators.html``.

    Source layout:
        site/
          _config.yml          # optional, see SiteConfig
          _layouts/
            default.html
            page.html
          index.md
          python/
            generators.md

    Documents are independent of each other. A failure in one is recorded in
    the BuildReport and the rest of the site still builds, unless fail_fast
    is set.
    """

    def __init__(
        self,
        source_dir: str | Path,
        config: SiteConfig | None = None,
        layouts_dir: str | Path | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            source_dir: Site source directory
            config: Site configuration. Defaults to the source directory's
                ``_config.yml``.
            layouts_dir: Layout directory, overriding the configured one.
                Relative paths are taken from the source directory.
        """
        self.source_dir = Path(source_dir)
        self.config = config if config is not None else load_config(self.source_dir)

        layouts = Path(layouts_dir) if layouts_dir is not None else Path(self.config.layouts_dir)
        if not layouts.is_absolute():
            layouts = self.source_dir / layouts

        self.loader = DocumentLoader(exclude=self.config.exclude)
        self.renderer = MarkdownRenderer(self.config.markdown_extensions)
        self.resolver = LayoutResolver([layouts])

    def render_document(self, document: Document) -> str:
        """Render a document to complete page HTML.

        Args:
            document: Document to render

        Returns:
            Page HTML

        Raises:
            LayoutNotFound: If the document's layout does not exist
        """
        fragment = self.renderer.render(document.body)
        try:
            return self.resolver.resolve(
                document.layout,
                fragment,
                page=document.front_matter,
                site=self.config.template_context(),
            )
        except BuildError as exc:
            raise exc.with_document(document.label)

    def build_document(self, document: Document, output_dir: str | Path) -> Path:
        """Render a document and write it to the output directory.

        The page is fully rendered before the output file is opened. A
        document that fails to render leaves no file behind, and a page left
        over from an earlier build at the same path is removed.

        Args:
            document: Document to build
            output_dir: Output root

        Returns:
            Path of the written file

        Raises:
            BuildError: If rendering fails
            IOFailure: If the page cannot be written
        """
        output_path = Path(output_dir) / document.output_relpath
        try:
            html = self.render_document(document)
        except BuildError:
            remove_stale_output(output_path)
            raise

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(html, encoding="utf-8")
        except OSError as exc:
            raise IOFailure(output_path, str(exc), document=document.label) from exc

        logger.debug("Wrote %s -> %s", document.identifier, output_path)
        return output_path

    def build(self, output_dir: str | Path, fail_fast: bool = False) -> BuildReport:
        """Build every document in the source directory.

        Args:
            output_dir: Output root
            fail_fast: Raise the first error instead of recording it

        Returns:
            BuildReport listing written pages and failed documents

        Raises:
            IOFailure: If the source directory does not exist
            BuildError: On the first failing document, when fail_fast is set
        """
        output_dir = Path(output_dir)
        report = BuildReport()
        # Output path -> source that wrote it during this build
        written_by: dict[Path, Path] = {}

        for path in self.loader.discover(self.source_dir):
            target = output_dir / path.relative_to(self.source_dir).with_suffix(".html")
            try:
                if target in written_by:
                    raise BuildError(
                        f"Output {target} is already produced by {written_by[target]}",
                        document=path,
                    )
                document = self.loader.load(path, self.source_dir)
                report.written.append(self.build_document(document, output_dir))
                written_by[target] = path
            except BuildError as exc:
                if target not in written_by:
                    remove_stale_output(target)
                if fail_fast:
                    raise
                logger.warning("Failed to build %s: %s", path, exc.message)
                report.failures.append(BuildFailure(path, exc))

        logger.info(
            "Built %d page(s) from %s, %d failure(s)",
            len(report.written), self.source_dir, len(report.failures),
        )
        return report


def remove_stale_output(path: Path) -> None:
    """Delete a page written by an earlier build, if there is one.

    A failed removal is logged rather than raised so the document's own
    build error is the one reported.
    """
    if not path.is_file():
        return
    try:
        path.unlink()
    except OSError as exc:
        logger.warning("Could not remove stale output %s: %s", path, exc)
    else:
        logger.debug("Removed stale %s", path)
