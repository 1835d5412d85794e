"""Shared pytest fixtures for propbind tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo configure_logging() side effects after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    propbind_logger = logging.getLogger("propbind")
    propbind_level = propbind_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    propbind_logger.setLevel(propbind_level)
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep PROPBIND_* variables from the developer's shell out of tests."""
    for name in ("JSON_OUTPUT", "VERBOSE", "LOG_JSON", "STRICT"):
        monkeypatch.delenv(f"PROPBIND_{name}", raising=False)


@pytest.fixture
def properties_file(tmp_path: Path):
    """Factory writing a properties file under tmp_path and returning its path."""

    def _write(text: str, name: str = "config.properties") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
