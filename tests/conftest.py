"""Shared fixtures for notiroute tests.

Provides recording channel handlers, the standard five-channel layout
used across the suite, explicit settings, and automatic reset of the
process-wide published configuration.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

import pytest

import notiroute
from notiroute.builder import ConfigBuilder
from notiroute.channels import ChannelHandler
from notiroute.config import Settings, get_settings

# (channel, group) in registration order.
FIVE_CHANNELS: list[tuple[str, str]] = [
    ("email", "default"),
    ("slack", "default"),
    ("webhook", "internal"),
    ("boo", "internal"),
    ("foo", "private"),
]


class RecordingHandler(ChannelHandler):
    """Handler that appends every delivery to a shared call log."""

    def __init__(self, name: str, alerts: Iterable[str], calls: list[tuple]) -> None:
        self.name = name
        self.alerts = frozenset(alerts)
        self.calls = calls

    def deliver(
        self,
        alert_name: str,
        payload: Any,
        template: str,
        recipient: str,
        default_value: Any,
    ) -> None:
        self.calls.append((self.name, alert_name, payload, template, recipient, default_value))


@pytest.fixture(autouse=True)
def _reset_published_configuration():
    """Every test starts and ends with nothing published."""
    notiroute.reset_configuration()
    get_settings.cache_clear()
    yield
    notiroute.reset_configuration()
    get_settings.cache_clear()


@pytest.fixture()
def settings() -> Settings:
    """Settings with explicit values, independent of the environment."""
    return Settings(
        default_value=None,
        default_group="default",
        check_constructor=False,
        log_level="INFO",
        log_json=False,
    )


@pytest.fixture()
def calls() -> list[tuple]:
    """Shared delivery log: ``(channel, alert, payload, template, recipient, default)``."""
    return []


@pytest.fixture()
def make_handler(calls: list[tuple]) -> Callable[..., RecordingHandler]:
    def _make(name: str, alerts: Iterable[str] = ()) -> RecordingHandler:
        return RecordingHandler(name, alerts, calls)

    return _make


@pytest.fixture()
def five_channels(make_handler) -> Callable[[ConfigBuilder, Iterable[str]], None]:
    """Register email/slack (default), webhook/boo (internal) and foo (private).

    Every handler services the given alert names.
    """

    def _register(config: ConfigBuilder, alerts: Iterable[str] = ()) -> None:
        alerts = tuple(alerts)
        for name, group in FIVE_CHANNELS:
            config.channel(name, make_handler(name, alerts), group=group)

    return _register


@pytest.fixture()
def builder(settings: Settings) -> ConfigBuilder:
    return ConfigBuilder(settings)
