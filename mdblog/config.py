from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from .errors import ConfigError
from .utils import parse_bool, parse_int

DEFAULT_CONFIG = "blog.toml"


def load_config(path: Path) -> dict:
    """Read a TOML, YAML or JSON config file. A missing file is an empty config."""
    if not path.exists():
        return {}
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError("Config file could not be read", path, exc) from exc
    suffix = path.suffix.lower()
    if suffix == ".toml":
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError("Invalid TOML in config file", path, exc) from exc
    elif suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError("Invalid YAML in config file", path, exc) from exc
        if data is None:
            return {}
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError("Invalid JSON in config file", path, exc) from exc
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a mapping", path)
    return data


@dataclass
class BuildSettings:
    css_source: Path
    md_sources: Path
    rendered_outputs: Path
    base_url: str = "./"
    site_name: str = ""
    order_by: str = "created"
    missing_title: str = "filename"
    templates: Optional[Path] = None
    build_workers: int = 0
    highlight: bool = True
    pygments_style: str = "default"

    @classmethod
    def from_args(cls, args: object) -> "BuildSettings":
        templates = (getattr(args, "templates", "") or "").strip()
        return cls(
            css_source=Path(args.css_source),
            md_sources=Path(args.md_sources),
            rendered_outputs=Path(args.rendered_outputs),
            base_url=getattr(args, "base_url", "./"),
            site_name=getattr(args, "site_name", ""),
            order_by=getattr(args, "order_by", "created"),
            missing_title=getattr(args, "missing_title", "filename"),
            templates=Path(templates) if templates else None,
            build_workers=parse_int(getattr(args, "build_workers", 0), 0),
            highlight=parse_bool(getattr(args, "highlight", True)),
            pygments_style=getattr(args, "pygments_style", "default"),
        )
