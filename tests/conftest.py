"""Shared pytest fixtures and test helpers for ksdate tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Generator
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest
from click.testing import CliRunner

from ksdate.config.settings import KsdateSettings

TOKYO = ZoneInfo("Asia/Tokyo")

# Friday, 2025-10-24 12:00 JST. Every test pins "now" to this instant.
REFERENCE = datetime(2025, 10, 24, 12, 0, tzinfo=TOKYO)
REFERENCE_ISO = "2025-10-24T12:00:00+09:00"


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test in an empty directory with no ``KSDATE_*`` env vars."""
    for name in list(os.environ):
        if name.startswith("KSDATE_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test (the CLI reconfigures it)."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    ksdate_logger = logging.getLogger("ksdate")
    ksdate_level = ksdate_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    ksdate_logger.setLevel(ksdate_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def reference() -> datetime:
    return REFERENCE


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """Clock pinned to :data:`REFERENCE`."""
    return lambda: REFERENCE


@pytest.fixture
def settings() -> KsdateSettings:
    """Settings on code defaults, in the Asia/Tokyo timezone."""
    return KsdateSettings.from_cli(timezone="Asia/Tokyo")


@pytest.fixture
def preview_settings() -> KsdateSettings:
    """Settings with preview enabled."""
    return KsdateSettings(
        date={"timezone": "Asia/Tokyo"},
        preview={"secret": "test-secret", "nonce_ttl": 3600},
    )
