"""Main entry point for docsite."""

import argparse
import logging
import sys
from pathlib import Path

import yaml

from .config import default_output_dir, default_source_dir, load_config
from .core.errors import BuildError
from .site import SiteBuilder


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Docsite - Markdown pages wrapped in HTML layouts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "SOURCE and OUTPUT default to $DOCSITE_SOURCE and $DOCSITE_OUTPUT,\n"
            "or 'site' and '_site' when those are unset."
        ),
    )
    parser.add_argument(
        "source",
        nargs="?",
        type=Path,
        help="Site source directory",
    )
    parser.add_argument(
        "output",
        nargs="?",
        type=Path,
        help="Directory to write HTML pages to",
    )
    parser.add_argument(
        "--layouts",
        metavar="DIR",
        type=Path,
        help="Layout directory, relative to the current directory (default: _layouts inside SOURCE)",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop at the first document that fails to build",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every document as it is built",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Build the site and return the process exit code."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    source = args.source or default_source_dir()
    output = args.output or default_output_dir()

    try:
        config = load_config(source)
    except (ValueError, yaml.YAMLError) as exc:
        print(f"error: invalid site config in {source}: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: cannot read site config in {source}: {exc}", file=sys.stderr)
        return 1

    print(f"Building {source} -> {output}")

    # Unlike layouts_dir in _config.yml, --layouts is taken from the working directory
    layouts = args.layouts.resolve() if args.layouts is not None else None
    builder = SiteBuilder(source, config=config, layouts_dir=layouts)
    try:
        report = builder.build(output, fail_fast=args.fail_fast)
    except BuildError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(f"Wrote {len(report.written)} page(s)")
    if not report.ok:
        print(f"{len(report.failures)} document(s) failed:", file=sys.stderr)
        for failure in report.failures:
            print(f"  - {failure}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
