from __future__ import annotations

from pathlib import Path

from pygments.formatters import HtmlFormatter
from pygments.util import ClassNotFound

from .errors import ConfigError, StyleError
from .models import StyleAsset


def load_style(path: Path) -> StyleAsset:
    if not path.is_file():
        raise StyleError("CSS source file not found", path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise StyleError("CSS source file could not be read", path, exc) from exc
    return StyleAsset(text=text, path=path)


def highlight_css(style_name: str, css_class: str = "codehilite") -> str:
    """Pygments rules for highlighted code blocks."""
    try:
        formatter = HtmlFormatter(style=style_name, cssclass=css_class)
    except ClassNotFound as exc:
        raise ConfigError(f"Unknown Pygments style {style_name!r}", cause=exc) from exc
    return formatter.get_style_defs(f".{css_class}")
