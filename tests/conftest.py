"""Shared pytest fixtures and test helpers for ddnsctl tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner

from ddnsctl.config.settings import DdnsSettings

CONFIG_ENV_VARS = (
    "DOMAINS",
    "IP4_DOMAINS",
    "IP6_DOMAINS",
    "IP6_PREFIX_LEN",
    "PROXIED",
    "DDNSCTL_CONFIG",
)


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Run every test in an empty directory with no ddnsctl env vars set.

    Also restores logging state, since the CLI reconfigures structlog
    and the ``ddnsctl`` logger on every invocation.
    """
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    ddns = logging.getLogger("ddnsctl")
    original_handlers = ddns.handlers[:]
    original_level = ddns.level
    original_propagate = ddns.propagate
    yield
    ddns.handlers = original_handlers
    ddns.setLevel(original_level)
    ddns.propagate = original_propagate
    structlog.reset_defaults()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


class RecordingReporter:
    """Reporter that keeps every advisory for later assertions."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def warning(self, event: str, *args: Any, **kw: Any) -> None:
        self.events.append((event, kw))

    @property
    def messages(self) -> list[str]:
        return [event for event, _ in self.events]


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def make_settings() -> Callable[..., DdnsSettings]:
    """Build DdnsSettings from keyword overrides only (no TOML discovery)."""

    def _make(**overrides: Any) -> DdnsSettings:
        return DdnsSettings(**overrides)

    return _make
