"""Environment-driven runtime settings."""

from __future__ import annotations

import os
from dataclasses import dataclass

from geocell.contracts import HashType
from geocell.errors import GeoCellError
from geocell.grid import (
    DEFAULT_MAX_NUM_CELLS,
    DEFAULT_PRECISION,
    DEFAULT_TYPE,
    check_precision_range,
    resolve_hash_type,
)

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True, slots=True)
class Settings:
    """Defaults applied when a request leaves hash type, precision or size unset."""

    hash_type: HashType = DEFAULT_TYPE
    precision: int = DEFAULT_PRECISION
    max_cells: int = DEFAULT_MAX_NUM_CELLS
    log_level: str = "INFO"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def load_settings() -> Settings:
    """Read GEOCELL_* environment variables into validated settings."""
    try:
        hash_type = resolve_hash_type(os.getenv("GEOCELL_HASH_TYPE", DEFAULT_TYPE.value))
    except GeoCellError as exc:
        raise ValueError(f"GEOCELL_HASH_TYPE: {exc}") from exc

    precision = _int_env("GEOCELL_PRECISION", DEFAULT_PRECISION)
    try:
        check_precision_range(precision, hash_type)
    except GeoCellError as exc:
        raise ValueError(f"GEOCELL_PRECISION: {exc}") from exc

    max_cells = _int_env("GEOCELL_MAX_CELLS", DEFAULT_MAX_NUM_CELLS)
    if max_cells < 1:
        raise ValueError("GEOCELL_MAX_CELLS must be >= 1")

    log_level = os.getenv("GEOCELL_LOG_LEVEL", "INFO").strip().upper()
    if log_level not in _LOG_LEVELS:
        raise ValueError(f"GEOCELL_LOG_LEVEL must be one of: {', '.join(sorted(_LOG_LEVELS))}")

    return Settings(hash_type=hash_type, precision=precision, max_cells=max_cells, log_level=log_level)
