from __future__ import annotations

from pathlib import Path
from typing import Optional


class BuildError(Exception):
    """A fatal condition that aborts the whole build."""

    def __init__(self, message: str, path: Optional[Path] = None, cause: Optional[BaseException] = None):
        self.path = path
        self.cause = cause
        detail = message
        if path is not None:
            detail = f"{detail} ({path})"
        if cause is not None:
            detail = f"{detail}: {cause}"
        super().__init__(detail)


class ConfigError(BuildError):
    pass


class StyleError(BuildError):
    pass


class SourceDirectoryError(BuildError):
    pass


class OutputDirectoryError(BuildError):
    pass


class OutputWriteError(BuildError):
    pass


class TemplateError(BuildError):
    pass
