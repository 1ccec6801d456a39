from __future__ import annotations

import datetime as dt
import os
import sys
from pathlib import Path
from typing import Callable

from .errors import ConfigError, SourceDirectoryError
from .models import SourceDocument

MARKDOWN_SUFFIX = ".md"

OrderKey = Callable[[Path, os.stat_result], dt.datetime]


def _utc(timestamp: float) -> dt.datetime:
    return dt.datetime.fromtimestamp(timestamp, tz=dt.timezone.utc)


def created_time(path: Path, stat: os.stat_result) -> dt.datetime:
    # st_birthtime only exists on macOS, the BSDs and Windows (3.12+).
    birth = getattr(stat, "st_birthtime", None)
    if birth is None:
        return _utc(stat.st_mtime)
    return _utc(birth)


def modified_time(path: Path, stat: os.stat_result) -> dt.datetime:
    return _utc(stat.st_mtime)


ORDER_KEYS: dict[str, OrderKey] = {
    "created": created_time,
    "modified": modified_time,
}


def resolve_order_key(name: str) -> OrderKey:
    try:
        return ORDER_KEYS[name]
    except KeyError:
        choices = ", ".join(sorted(ORDER_KEYS))
        raise ConfigError(f"Unknown ordering {name!r} (expected one of: {choices})") from None


def list_markdown_files(source_dir: Path) -> list[Path]:
    if not source_dir.is_dir():
        raise SourceDirectoryError("Markdown sources directory not found", source_dir)
    try:
        with os.scandir(source_dir) as entries:
            return [
                Path(entry.path) for entry in entries if entry.name.endswith(MARKDOWN_SUFFIX) and entry.is_file()
            ]
    except OSError as exc:
        raise SourceDirectoryError("Markdown sources directory could not be read", source_dir, exc) from exc


def collect_sources(source_dir: Path, order_key: OrderKey = created_time) -> list[SourceDocument]:
    """Discover the Markdown files in ``source_dir``, oldest first.

    Files whose metadata cannot be read are reported and left out. Ties on the
    ordering timestamp are broken by file name.
    """
    documents = []
    for path in list_markdown_files(source_dir):
        try:
            created = order_key(path, path.stat())
        except OSError as exc:
            print(f"warning: skipping {path}: could not read metadata: {exc}", file=sys.stderr)
            continue
        documents.append(SourceDocument(name=path.name, path=path, created=created))
    documents.sort(key=lambda doc: (doc.created, doc.name))
    return documents
