"""
Configuration registry for notiroute.

:class:`Configuration` owns the channel registry, the alert graph and the
hook pipeline, plus the global default value and the opt-in provider.  It
is mutable only while a :class:`~notiroute.builder.ConfigBuilder` fills it
in; ``build()`` validates and freezes it, after which it is safe to share
between threads.

The module also keeps the process-wide *current* configuration: unset at
start, replaced by every :func:`publish`, cleared by :func:`reset`.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Any

import structlog

from notiroute.alert_graph import AlertGraph
from notiroute.channel_registry import ChannelRegistry
from notiroute.config import Settings, get_settings
from notiroute.errors import InvalidAlert, MissingConfiguration
from notiroute.hooks import HookPipeline
from notiroute.models import Alert, Channel, Scope
from notiroute.opt_in import InMemoryOptInProvider, OptInProvider
from notiroute.validation import validate

logger = structlog.get_logger()

UNSET: Any = object()


class Configuration:
    """The complete channel/scope/alert graph.

    Args:
        settings: Process settings; defaults to :func:`get_settings`.
        default_value: Global default overriding ``settings.default_value``.
        opt_in_provider: Opt-in storage; defaults to an in-memory provider.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        default_value: Any = UNSET,
        opt_in_provider: OptInProvider | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        if default_value is UNSET:
            default_value = self.settings.default_value
        self.channel_registry = ChannelRegistry(default_group=self.settings.default_group)
        self.alert_graph = AlertGraph(self.channel_registry, default_value=default_value)
        self.hooks = HookPipeline()
        if opt_in_provider is None:
            opt_in_provider = InMemoryOptInProvider()
        self.opt_in_provider: OptInProvider = opt_in_provider
        self._frozen = False

    # ── lifecycle ──

    def validate(self) -> None:
        validate(self.alert_graph)

    def freeze(self) -> None:
        """Reject every further mutation of the graph, channels and hooks."""
        self.channel_registry.freeze()
        self.alert_graph.freeze()
        self.hooks.freeze()
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ── channels ──

    @property
    def channels(self) -> Mapping[str, Channel]:
        return self.channel_registry.channels

    @property
    def channel_groups(self) -> set[str]:
        return self.channel_registry.groups()

    def channels_by_group(self, group: str) -> list[Channel]:
        return self.channel_registry.by_group(group)

    # ── alerts ──

    @property
    def default_value(self) -> Any:
        return self.alert_graph.default_value

    @property
    def scopes(self) -> Mapping[str, Scope]:
        return self.alert_graph.scopes

    @property
    def alerts(self) -> Mapping[str, Alert]:
        return self.alert_graph.alerts

    def alerts_by_scope(self, scope_name: str) -> list[Alert]:
        return self.alert_graph.alerts_by_scope(scope_name)

    def alert_by_name(self, name: str) -> Alert | None:
        return self.alert_graph.alert_by_name(name)

    def alert_channels(self, alert_name: str) -> list[Channel]:
        return self.alert_graph.alert_channels(alert_name)

    def default_for(self, alert_name: str, channel_name: str) -> Any:
        """Resolve the default value *alert_name* hands to *channel_name*.

        Raises:
            InvalidAlert: *alert_name* is not configured.
        """
        alert = self.alert_graph.alert_by_name(alert_name)
        if alert is None:
            raise InvalidAlert(alert_name)
        return self.alert_graph.resolve_default(alert, channel_name)

    def __repr__(self) -> str:
        return (
            f"<Configuration channels={len(self.channels)} scopes={len(self.scopes)} "
            f"alerts={len(self.alerts)} frozen={self._frozen}>"
        )


# ── process-wide current configuration ──

_lock = threading.Lock()
_current: Configuration | None = None


def publish(config: Configuration) -> Configuration:
    """Make *config* the current configuration, replacing any previous one."""
    global _current
    with _lock:
        replaced = _current is not None
        _current = config
    logger.info(
        "configuration_published",
        channels=len(config.channels),
        scopes=len(config.scopes),
        alerts=len(config.alerts),
        replaced=replaced,
    )
    return config


def current() -> Configuration:
    """Return the current configuration.

    Raises:
        MissingConfiguration: nothing has been published yet.
    """
    with _lock:
        config = _current
    if config is None:
        raise MissingConfiguration()
    return config


def reset() -> None:
    """Forget the current configuration."""
    global _current
    with _lock:
        _current = None
