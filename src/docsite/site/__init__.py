"""Whole-site builds."""

from .builder import BuildFailure, BuildReport, SiteBuilder

__all__ = ["BuildFailure", "BuildReport", "SiteBuilder"]
