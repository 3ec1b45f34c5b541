"""
Alert dispatcher for notiroute.

Resolves an alert name into concrete deliveries and invokes the channel
handlers synchronously.

Flow
----
1. Look up the alert; unknown names raise :class:`InvalidAlert`.
2. For each notifier, in declaration order, expand its target into
   channels (a group expands in channel registration order).
3. For each channel call ``handler.<alert_name>(payload, template,
   recipient, default_value)``.

Handler exceptions propagate to the caller unchanged.  Deliveries made
before the failure are not rolled back and nothing is retried.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog

from notiroute.errors import InvalidAlert
from notiroute.models import Channel
from notiroute.registry import Configuration

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class Delivery:
    """One resolved handler invocation.

    Attributes:
        channel: Channel whose handler is called.
        recipient: Recipient role of the notifier.
        template: Notifier template, passed through.
        default_value: Default resolved for this channel.
    """

    channel: Channel
    recipient: str
    template: str
    default_value: Any


class Dispatcher:
    """Dispatches alerts through a built :class:`Configuration`.

    Only reads the configuration, so one dispatcher can serve concurrent
    callers once the configuration is frozen.
    """

    def __init__(self, configuration: Configuration) -> None:
        self.configuration = configuration

    def resolve(self, alert_name: str) -> list[Delivery]:
        """Return the ordered deliveries ``notify(alert_name, ...)`` would make.

        Raises:
            InvalidAlert: no alert called *alert_name* is configured.
        """
        graph = self.configuration.alert_graph
        alert = graph.alert_by_name(alert_name)
        if alert is None:
            raise InvalidAlert(alert_name)

        deliveries: list[Delivery] = []
        for notifier in alert.notifiers.values():
            for channel in graph.applicable_channels(notifier):
                deliveries.append(
                    Delivery(
                        channel=channel,
                        recipient=notifier.recipient,
                        template=notifier.template,
                        default_value=graph.resolve_default(alert, channel.name),
                    )
                )
        return deliveries

    def notify(self, alert_name: str, payload: Any) -> None:
        """Deliver *payload* for *alert_name* to every resolved channel.

        Raises:
            InvalidAlert: no alert called *alert_name* is configured.
        """
        deliveries = self.resolve(alert_name)
        log = logger.bind(alert=alert_name)

        for delivery in deliveries:
            log.debug(
                "alert_delivering",
                channel=delivery.channel.name,
                recipient=delivery.recipient,
            )
            handler_method = getattr(delivery.channel.handler, alert_name)
            handler_method(payload, delivery.template, delivery.recipient, delivery.default_value)

        log.info("alert_dispatched", deliveries=len(deliveries))
