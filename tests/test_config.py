"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from geocell.config import Settings, load_settings
from geocell.contracts import HashType


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("GEOCELL_HASH_TYPE", "GEOCELL_PRECISION", "GEOCELL_MAX_CELLS", "GEOCELL_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_load_settings_defaults() -> None:
    """Unset variables fall back to defaults."""
    assert load_settings() == Settings()
    assert Settings().hash_type is HashType.MAPTILE
    assert Settings().precision == 5


def test_load_settings_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """GEOCELL_* variables override defaults."""
    monkeypatch.setenv("GEOCELL_HASH_TYPE", "PlusCode")
    monkeypatch.setenv("GEOCELL_PRECISION", "10")
    monkeypatch.setenv("GEOCELL_MAX_CELLS", "50")
    monkeypatch.setenv("GEOCELL_LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings == Settings(
        hash_type=HashType.PLUSCODE, precision=10, max_cells=50, log_level="DEBUG"
    )


@pytest.mark.parametrize(
    ("name", "value", "message"),
    [
        ("GEOCELL_HASH_TYPE", "geohash", "GEOCELL_HASH_TYPE"),
        ("GEOCELL_PRECISION", "abc", "GEOCELL_PRECISION must be an integer"),
        ("GEOCELL_PRECISION", "30", "GEOCELL_PRECISION"),
        ("GEOCELL_MAX_CELLS", "0", "GEOCELL_MAX_CELLS"),
        ("GEOCELL_LOG_LEVEL", "loud", "GEOCELL_LOG_LEVEL"),
    ],
)
def test_load_settings_rejects_invalid_values(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str, message: str
) -> None:
    """Invalid values name the offending variable."""
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError, match=message):
        load_settings()
