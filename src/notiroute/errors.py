"""
Exception hierarchy for notiroute.

Build-time failures derive from :class:`BadConfiguration` and abort the
whole ``configure()`` call, so no partial configuration is ever published.
Runtime failures (:class:`InvalidAlert`, :class:`MissingConfiguration`)
surface from the call that triggered them.  Exceptions raised by channel
handlers or hook handlers are never wrapped.

Usage::

    from notiroute.errors import BadConfiguration, InvalidAlert

    try:
        notiroute.notify("new_signup", payload)
    except InvalidAlert as exc:
        log.warning("unknown_alert", **exc.details)
"""

from __future__ import annotations

from typing import Any


class NotirouteError(Exception):
    """Base exception for every error raised by notiroute.

    Args:
        message: Human-readable description.
        **details: Structured context, convenient for ``log.bind(**details)``.
    """

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


# ── build time ──


class BadConfiguration(NotirouteError):
    """The configuration being built is invalid."""


class DuplicateChannel(BadConfiguration):
    def __init__(self, name: str) -> None:
        super().__init__(f"channel '{name}' already defined", channel=name)


class InvalidHandler(BadConfiguration):
    """A channel handler was registered as a class instead of an instance."""

    def __init__(self, channel: str, handler: Any) -> None:
        super().__init__(
            f"channel '{channel}' handler {handler.__name__} is a class; register an instance",
            channel=channel,
        )


class DuplicateScope(BadConfiguration):
    def __init__(self, name: str) -> None:
        super().__init__(f"scope '{name}' already defined", scope=name)


class DuplicateAlert(BadConfiguration):
    """An alert name is already taken, in this scope or any other."""

    def __init__(self, name: str, existing_scope: str) -> None:
        super().__init__(
            f"alert '{name}' already defined in scope '{existing_scope}'",
            alert=name,
            scope=existing_scope,
        )


class DuplicateNotifier(BadConfiguration):
    def __init__(self, alert: str, recipient: str) -> None:
        super().__init__(
            f"a notify is already defined for '{recipient}' on alert '{alert}'",
            alert=alert,
            recipient=recipient,
        )


class UnknownTarget(BadConfiguration):
    """A notifier target matches neither a channel group nor a channel."""

    def __init__(self, target: str) -> None:
        super().__init__(
            f"no channel or channel group found named '{target}'",
            target=target,
        )


class UnknownChannel(BadConfiguration):
    def __init__(self, name: str) -> None:
        super().__init__(f"no channel named '{name}'", channel=name)


class UnknownHookEvent(BadConfiguration):
    def __init__(self, event: Any) -> None:
        super().__init__(f"invalid hook event '{event}'", event=str(event))


class NoNotifiers(BadConfiguration):
    def __init__(self, alert: str) -> None:
        super().__init__(
            f"no notifiers are assigned to alert '{alert}'",
            alert=alert,
        )


class MissingCapability(BadConfiguration):
    """A channel targeted by an alert cannot handle that alert."""

    def __init__(self, alert: str, channel: str, handler: Any) -> None:
        super().__init__(
            f"channel '{channel}' ({type(handler).__name__}) has no method called '{alert}'",
            alert=alert,
            channel=channel,
        )


class MissingPayloadConstructor(BadConfiguration):
    def __init__(self, alert: str, payload_class: Any, constructor_name: str) -> None:
        payload_name = getattr(payload_class, "__name__", repr(payload_class))
        super().__init__(
            f"payload {payload_name} doesn't have a class method called '{constructor_name}'",
            alert=alert,
            constructor=constructor_name,
        )


class ConfigurationFrozen(BadConfiguration):
    """A mutation was attempted after the configuration was validated."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"configuration is frozen; '{operation}' is not allowed after build",
            operation=operation,
        )


# ── runtime ──


class InvalidAlert(NotirouteError):
    def __init__(self, name: Any) -> None:
        super().__init__(f"no alert named '{name}' is configured", alert=str(name))


class MissingConfiguration(NotirouteError):
    def __init__(self) -> None:
        super().__init__("notiroute has not been configured; call notiroute.configure() first")
