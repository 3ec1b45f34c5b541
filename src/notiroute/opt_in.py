"""
Opt-in providers for notiroute.

The configuration carries an opt-in provider so host applications can ask
whether a recipient wants a given alert on a given channel.  Dispatch
itself does not consult it; filtering recipients is the channel's or the
caller's concern.
"""

from __future__ import annotations

import threading
from typing import Protocol, runtime_checkable

import structlog

logger = structlog.get_logger()

OptInKey = tuple[str, str, str, str, str]


@runtime_checkable
class OptInProvider(Protocol):
    """Storage for per-recipient, per-channel alert subscriptions."""

    def opt_in(
        self, *, recipient_id: str, scope: str, entity_id: str, alert_name: str, channel_name: str
    ) -> None:
        ...

    def opt_out(
        self, *, recipient_id: str, scope: str, entity_id: str, alert_name: str, channel_name: str
    ) -> None:
        ...

    def is_opted_in(
        self, *, recipient_id: str, scope: str, entity_id: str, alert_name: str, channel_name: str
    ) -> bool:
        ...


class InMemoryOptInProvider:
    """Thread-safe, process-local :class:`OptInProvider`.

    Opt-ins are kept in a set keyed by
    ``(recipient_id, scope, entity_id, alert_name, channel_name)``.
    """

    def __init__(self) -> None:
        self._opt_ins: set[OptInKey] = set()
        self._lock = threading.Lock()

    def opt_in(
        self, *, recipient_id: str, scope: str, entity_id: str, alert_name: str, channel_name: str
    ) -> None:
        key = (recipient_id, scope, entity_id, alert_name, channel_name)
        with self._lock:
            self._opt_ins.add(key)
        logger.debug("opted_in", recipient_id=recipient_id, alert=alert_name, channel=channel_name)

    def opt_out(
        self, *, recipient_id: str, scope: str, entity_id: str, alert_name: str, channel_name: str
    ) -> None:
        key = (recipient_id, scope, entity_id, alert_name, channel_name)
        with self._lock:
            self._opt_ins.discard(key)
        logger.debug("opted_out", recipient_id=recipient_id, alert=alert_name, channel=channel_name)

    def is_opted_in(
        self, *, recipient_id: str, scope: str, entity_id: str, alert_name: str, channel_name: str
    ) -> bool:
        key = (recipient_id, scope, entity_id, alert_name, channel_name)
        with self._lock:
            return key in self._opt_ins

    def __len__(self) -> int:
        with self._lock:
            return len(self._opt_ins)
