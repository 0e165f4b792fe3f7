"""Site configuration loaded from ``_config.yml``."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .render.markdown import DEFAULT_EXTENSIONS

CONFIG_FILENAME = "_config.yml"

# Environment variables that override the default source/output paths
SOURCE_ENV_VAR = "DOCSITE_SOURCE"
OUTPUT_ENV_VAR = "DOCSITE_OUTPUT"

DEFAULT_SOURCE_DIR = "site"
DEFAULT_OUTPUT_DIR = "_site"

# Keys consumed by the generator; anything else is passed to templates as-is
_KNOWN_KEYS = ("title", "layouts_dir", "markdown_extensions", "exclude")


@dataclass
class SiteConfig:
    """Settings for building one site.

    YAML format:
    ```yaml
    title: Python Notes
    layouts_dir: _layouts
    markdown_extensions: [fenced_code, tables, toc]
    exclude: [drafts, README.md]
    author: someone   # extra keys are available to layouts as site.author
    ```
    """

    title: str = ""
    layouts_dir: str = "_layouts"
    markdown_extensions: list[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    exclude: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    def template_context(self) -> dict[str, Any]:
        """Values exposed to layouts as ``site``."""
        context = dict(self.extra)
        context["title"] = self.title
        return context


def load_config(source_dir: str | Path) -> SiteConfig:
    """Load the site configuration for a source directory.

    Args:
        source_dir: Site source directory

    Returns:
        SiteConfig, with defaults if the directory has no config file

    Raises:
        ValueError: If the config file is not a YAML mapping or a known key
            has the wrong type
        OSError: If the config file exists but cannot be read
    """
    path = Path(source_dir) / CONFIG_FILENAME
    if not path.is_file():
        return SiteConfig()

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return parse_config(data or {})


def parse_config(data: Any) -> SiteConfig:
    """Parse site configuration from loaded YAML data."""
    if not isinstance(data, dict):
        raise ValueError(f"{CONFIG_FILENAME} must contain a mapping")

    config = SiteConfig()
    title = data.get("title")
    config.title = "" if title is None else str(title)

    layouts_dir = data.get("layouts_dir", config.layouts_dir)
    if not isinstance(layouts_dir, str) or not layouts_dir:
        raise ValueError("'layouts_dir' must be a non-empty string")
    config.layouts_dir = layouts_dir

    for key in ["markdown_extensions", "exclude"]:
        if key in data:
            value = data[key]
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ValueError(f"'{key}' must be a list of strings")
            setattr(config, key, list(value))

    config.extra = {k: v for k, v in data.items() if k not in _KNOWN_KEYS}
    return config


def default_source_dir() -> Path:
    """Source directory from the environment, or the default."""
    return Path(os.environ.get(SOURCE_ENV_VAR) or DEFAULT_SOURCE_DIR)


def default_output_dir() -> Path:
    """Output directory from the environment, or the default."""
    return Path(os.environ.get(OUTPUT_ENV_VAR) or DEFAULT_OUTPUT_DIR)
