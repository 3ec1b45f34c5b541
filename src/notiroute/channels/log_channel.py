"""
Logging channel for notiroute.

Records every delivery as a structured log line instead of sending it
anywhere.  Useful in development and as the fallback channel of a
configuration whose real transports are not wired up yet.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import structlog

from .base import ChannelHandler

logger = structlog.get_logger()


class LogChannel(ChannelHandler):
    """Log deliveries for a fixed set of alerts.

    Args:
        alerts: Alert names this channel services.
        level: structlog method used for the log line (``info``, ``debug``…).
    """

    name: str = "log"

    def __init__(self, alerts: Iterable[str], *, level: str = "info") -> None:
        self.alerts = frozenset(alerts)
        self.level = level

    def deliver(
        self,
        alert_name: str,
        payload: Any,
        template: str,
        recipient: str,
        default_value: Any,
    ) -> None:
        log = getattr(logger, self.level)
        log(
            "notification_logged",
            alert=alert_name,
            recipient=recipient,
            template=template,
            default=default_value,
            payload=repr(payload),
        )
