"""Records passed between the stages of a build."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class SourceDocument:
    """A Markdown file discovered in the sources directory.

    ``created`` is fixed at discovery. ``title`` stays ``None`` until the
    document has been converted.
    """

    name: str
    path: Path
    created: dt.datetime
    title: Optional[str] = None

    @property
    def output_name(self) -> str:
        return f"{Path(self.name).stem}.html"


@dataclass(frozen=True)
class PageLink:
    """A page that was rendered and written, as listed on the index."""

    title: str
    url: str


@dataclass(frozen=True)
class StyleAsset:
    """CSS text shared by every rendered page."""

    text: str
    path: Optional[Path] = None


@dataclass(frozen=True)
class SkippedDocument:
    path: Path
    reason: str


@dataclass
class BuildResult:
    """Outcome of one complete build."""

    pages: list[PageLink] = field(default_factory=list)
    skipped: list[SkippedDocument] = field(default_factory=list)
    index: Optional[Path] = None
