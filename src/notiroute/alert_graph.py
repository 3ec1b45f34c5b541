"""
Alert graph for notiroute.

Holds scopes, the alerts declared in them, and each alert's notifiers,
default values and applicability.  Alert names form a single namespace
across every scope.

Target resolution
-----------------
``set_target`` decides, once, whether a notifier addresses a channel
group or a single channel:

1. If the name is a group tag currently in use, the target is that group.
2. Otherwise, if it is a registered channel name, the target is that
   channel.
3. Otherwise the build fails with :class:`UnknownTarget`.

A name that is both a group tag and a channel name resolves to the group.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

import structlog

from notiroute.channel_registry import ChannelRegistry
from notiroute.errors import (
    ConfigurationFrozen,
    DuplicateAlert,
    DuplicateNotifier,
    DuplicateScope,
    UnknownChannel,
    UnknownTarget,
)
from notiroute.models import (
    ANY_CHANNEL,
    Alert,
    Channel,
    ChannelTarget,
    DefaultValue,
    GroupTarget,
    Notifier,
    Scope,
)

logger = structlog.get_logger()


class AlertGraph:
    """Scopes, alerts, notifiers and defaults, resolved against channels.

    Args:
        channels: Registry used to resolve notifier targets and defaults.
        default_value: Global default copied into every new alert's
            ``_any_`` default.
    """

    def __init__(self, channels: ChannelRegistry, default_value: Any = None) -> None:
        self._channels = channels
        self.default_value = default_value
        self._scopes: dict[str, Scope] = {}
        # alert name → alert, across every scope
        self._alerts: dict[str, Alert] = {}
        self._frozen = False

    def _check_open(self, operation: str) -> None:
        if self._frozen:
            raise ConfigurationFrozen(operation)

    def freeze(self) -> None:
        self._frozen = True

    # ── scopes & alerts ──

    def define_scope(
        self,
        name: str,
        payload_class: Any = None,
        check_constructor: bool = False,
    ) -> Scope:
        """Create a scope.

        Raises:
            DuplicateScope: *name* is already defined.
        """
        self._check_open("define scope")
        if name in self._scopes:
            raise DuplicateScope(name)
        scope = Scope(
            name=name,
            payload_class=payload_class,
            check_constructor=check_constructor,
        )
        self._scopes[name] = scope
        return scope

    def define_alert(
        self,
        scope: Scope,
        name: str,
        tags: Iterable[str] = (),
        constructor_name: str | None = None,
    ) -> Alert:
        """Create an alert in *scope*.

        Raises:
            DuplicateAlert: *name* is already used by an alert in any scope.
        """
        self._check_open("define alert")
        existing = self._alerts.get(name)
        if existing is not None:
            raise DuplicateAlert(name, existing.scope.name)
        alert = Alert(
            name=name,
            scope=scope,
            constructor_name=constructor_name or name,
            tags=tuple(tags),
        )
        alert.defaults[ANY_CHANNEL] = DefaultValue(channel=ANY_CHANNEL, value=self.default_value)
        scope.alerts[name] = alert
        self._alerts[name] = alert
        logger.debug("alert_registered", alert=name, scope=scope.name)
        return alert

    # ── notifiers ──

    def add_notifier(self, alert: Alert, recipient: str, template: str = "") -> Notifier:
        """Attach a notifier for *recipient* to *alert*.

        The notifier starts out targeting the default channel group.

        Raises:
            DuplicateNotifier: *recipient* already has a notifier on *alert*.
        """
        self._check_open("add notifier")
        if recipient in alert.notifiers:
            raise DuplicateNotifier(alert.name, recipient)
        notifier = Notifier(
            recipient=recipient,
            target=GroupTarget(group=self._channels.default_group),
            template=template,
        )
        alert.notifiers[recipient] = notifier
        return notifier

    def set_target(self, notifier: Notifier, target: str) -> Notifier:
        """Point *notifier* at the group or channel called *target*.

        Raises:
            UnknownTarget: *target* names neither a group nor a channel.
        """
        self._check_open("set notifier target")
        if target in self._channels.groups():
            notifier.target = GroupTarget(group=target)
        elif target in self._channels:
            notifier.target = ChannelTarget(channel=target)
        else:
            raise UnknownTarget(target)
        return notifier

    def applicable_channels(self, notifier: Notifier) -> list[Channel]:
        """Return the channels *notifier* delivers to, in order."""
        target = notifier.target
        if isinstance(target, ChannelTarget):
            channel = self._channels.lookup(target.channel)
            return [channel] if channel is not None else []
        return self._channels.by_group(target.group)

    def alert_channels(self, name: str) -> list[Channel]:
        """Return every channel reachable from alert *name*.

        Channels are listed once, in notifier declaration order.  An
        unknown alert yields an empty list.
        """
        alert = self._alerts.get(name)
        if alert is None:
            return []
        seen: dict[str, Channel] = {}
        for notifier in alert.notifiers.values():
            for channel in self.applicable_channels(notifier):
                seen.setdefault(channel.name, channel)
        return list(seen.values())

    # ── defaults ──

    def set_default(self, alert: Alert, value: Any, on_channel: str | None = None) -> DefaultValue:
        """Set *alert*'s default value, alert-wide or for one channel.

        Raises:
            UnknownChannel: *on_channel* is not a registered channel.
        """
        self._check_open("set default")
        if on_channel is None:
            default = alert.defaults[ANY_CHANNEL]
            default.value = value
            return default
        if on_channel not in self._channels:
            raise UnknownChannel(on_channel)
        default = DefaultValue(channel=on_channel, value=value)
        alert.defaults[on_channel] = default
        return default

    @staticmethod
    def resolve_default(alert: Alert, channel_name: str) -> Any:
        """Return the default for *channel_name*, else the alert-wide default."""
        default = alert.defaults.get(channel_name)
        if default is None:
            default = alert.defaults[ANY_CHANNEL]
        return default.value

    # ── queries ──

    def alerts_by_scope(self, scope_name: str) -> list[Alert]:
        """Return the alerts of *scope_name* in declaration order."""
        scope = self._scopes.get(scope_name)
        if scope is None:
            return []
        return list(scope.alerts.values())

    def alert_by_name(self, name: str) -> Alert | None:
        return self._alerts.get(name)

    @property
    def scopes(self) -> Mapping[str, Scope]:
        return MappingProxyType(self._scopes)

    @property
    def alerts(self) -> Mapping[str, Alert]:
        return MappingProxyType(self._alerts)
