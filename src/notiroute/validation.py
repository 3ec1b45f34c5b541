"""
Configuration validation for notiroute.

Runs once, at the end of the build, over the completed alert graph.

Checks, per scope in declaration order and per alert in declaration order:

1. The alert has at least one notifier (:class:`NoNotifiers`).
2. Every channel reachable through its notifiers can handle the alert
   (:class:`MissingCapability`).
3. If the scope checks constructors, its payload class exposes a
   callable named after the alert's constructor
   (:class:`MissingPayloadConstructor`).

The first failure is raised; errors are not aggregated.
"""

from __future__ import annotations

import structlog

from notiroute.alert_graph import AlertGraph
from notiroute.channels.base import handles_alert
from notiroute.errors import MissingCapability, MissingPayloadConstructor, NoNotifiers
from notiroute.models import Alert

logger = structlog.get_logger()


def validate_alert(graph: AlertGraph, alert: Alert) -> None:
    """Validate a single *alert* against *graph*."""
    if not alert.notifiers:
        raise NoNotifiers(alert.name)

    for channel in graph.alert_channels(alert.name):
        if not handles_alert(channel.handler, alert.name):
            raise MissingCapability(alert.name, channel.name, channel.handler)

    scope = alert.scope
    if scope.check_constructor:
        constructor = getattr(scope.payload_class, alert.constructor_name, None)
        if scope.payload_class is None or not callable(constructor):
            raise MissingPayloadConstructor(alert.name, scope.payload_class, alert.constructor_name)


def validate(graph: AlertGraph) -> None:
    """Validate every alert in *graph*, failing fast."""
    checked = 0
    for scope in graph.scopes.values():
        for alert in scope.alerts.values():
            validate_alert(graph, alert)
            checked += 1
    logger.debug("configuration_validated", scopes=len(graph.scopes), alerts=checked)
