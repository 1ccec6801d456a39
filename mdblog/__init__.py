"""Render a directory of Markdown posts into a static HTML blog."""

__version__ = "0.1.0"
