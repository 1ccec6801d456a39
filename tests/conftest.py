from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

import pytest

from mdblog.config import BuildSettings

BASE_TIME = 1_700_000_000


@pytest.fixture
def css_file(tmp_path: Path) -> Path:
    path = tmp_path / "style.css"
    path.write_text("body{color:red}", encoding="utf-8")
    return path


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    path = tmp_path / "posts"
    path.mkdir()
    return path


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    path = tmp_path / "public"
    path.mkdir()
    return path


@pytest.fixture
def write_post(source_dir: Path) -> Callable[..., Path]:
    """Write a post whose mtime is ``BASE_TIME + offset`` seconds."""

    def _write(name: str, text: str, offset: int = 0) -> Path:
        path = source_dir / name
        path.write_text(text, encoding="utf-8")
        os.utime(path, (BASE_TIME + offset, BASE_TIME + offset))
        return path

    return _write


@pytest.fixture
def settings(css_file: Path, source_dir: Path, output_dir: Path) -> BuildSettings:
    return BuildSettings(
        css_source=css_file,
        md_sources=source_dir,
        rendered_outputs=output_dir,
        order_by="modified",
        build_workers=1,
    )
