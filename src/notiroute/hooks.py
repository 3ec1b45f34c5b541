"""
Lifecycle hooks for notiroute.

Hooks are plain callables registered against a closed set of events.
They fire synchronously, in registration order, while the configuration
is being built.  A failing hook aborts the build; there is no isolation
between handlers.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from typing import Any

import structlog

from notiroute.errors import ConfigurationFrozen, UnknownHookEvent

logger = structlog.get_logger()

HookHandler = Callable[[Any], Any]


class HookEvent(str, enum.Enum):
    """Registration boundaries at which hooks fire."""

    PRE_CHANNEL_REGISTRATION = "pre_channel_registration"
    POST_CHANNEL_REGISTRATION = "post_channel_registration"
    PRE_ALERT_REGISTRATION = "pre_alert_registration"
    POST_ALERT_REGISTRATION = "post_alert_registration"


def _coerce_event(event: HookEvent | str) -> HookEvent:
    try:
        return HookEvent(event)
    except ValueError:
        raise UnknownHookEvent(event) from None


class HookPipeline:
    """Ordered, append-only hook handler lists keyed by :class:`HookEvent`."""

    def __init__(self) -> None:
        self._storage: dict[HookEvent, list[HookHandler]] = {}
        self._frozen = False

    def add(self, event: HookEvent | str, handler: HookHandler) -> None:
        """Append *handler* to the list for *event*.

        Args:
            event: A :class:`HookEvent` or its string value.
            handler: Callable receiving the channel or alert being registered.

        Raises:
            UnknownHookEvent: *event* is not one of the four hook events.
        """
        if self._frozen:
            raise ConfigurationFrozen("add hook")
        kind = _coerce_event(event)
        self._storage.setdefault(kind, []).append(handler)

    def fire(self, event: HookEvent | str, subject: Any) -> None:
        """Call every handler registered for *event* with *subject*.

        Handler exceptions propagate unchanged and stop the remaining
        handlers from running.
        """
        kind = _coerce_event(event)
        handlers = self._storage.get(kind, [])
        for handler in handlers:
            handler(subject)
        if handlers:
            logger.debug("hook_fired", hook_event=kind.value, handlers=len(handlers))

    def fetch(self, event: HookEvent | str) -> list[HookHandler]:
        """Return a copy of the handlers registered for *event*."""
        return list(self._storage.get(_coerce_event(event), []))

    def freeze(self) -> None:
        self._frozen = True

    def __len__(self) -> int:
        """Number of events with at least one handler."""
        return len(self._storage)
