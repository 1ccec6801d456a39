from __future__ import annotations

import os

MAX_WORKERS = 32


def parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "on"}
    return False


def parse_int(value: object, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def resolve_workers(requested: int, jobs: int) -> int:
    """Thread count for ``jobs`` documents; 0 or less means one per CPU."""
    workers = requested if requested > 0 else (os.cpu_count() or 1)
    workers = max(1, min(workers, MAX_WORKERS))
    return max(1, min(workers, jobs))
