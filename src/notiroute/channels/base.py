"""
Channel handler contract for notiroute.

A handler services an alert through a callable member named after the
alert, with the signature ``(payload, template, recipient, default_value)``.
Whether a handler can service an alert is an explicit capability,
:meth:`AlertCapable.handles`, checked once when the configuration is
validated.
"""

from __future__ import annotations

import inspect
from typing import Any, Protocol, runtime_checkable

_MISSING = object()


@runtime_checkable
class AlertCapable(Protocol):
    """Handlers that declare which alerts they service."""

    def handles(self, alert_name: str) -> bool:
        ...


def handles_alert(handler: Any, alert_name: str) -> bool:
    """Return ``True`` if *handler* can service *alert_name*.

    Handler instances implementing :class:`AlertCapable` are asked
    directly; classes and any other object must expose a callable member
    named after the alert.
    """
    if not isinstance(handler, type) and isinstance(handler, AlertCapable):
        return bool(handler.handles(alert_name))
    return callable(getattr(handler, alert_name, None))


class ChannelHandler:
    """Base class for channel handlers.

    Subclasses either define one method per alert::

        class EmailHandler(ChannelHandler):
            def new_signup(self, payload, template, recipient, default_value):
                ...

    or list the alerts they service in :attr:`alerts` and override
    :meth:`deliver`, which then receives every one of them.

    Attributes:
        name: Handler name used in logs.
        alerts: Alert names serviced through :meth:`deliver`.
    """

    name: str = "base"
    alerts: frozenset[str] = frozenset()

    def handles(self, alert_name: str) -> bool:
        """Return ``True`` if ``getattr(self, alert_name)`` delivers *alert_name*.

        A handler that overrides :meth:`deliver` services the names in
        :attr:`alerts` that no real attribute shadows.  Any other handler
        needs a public method of that name defined on its own class, not
        inherited from :class:`ChannelHandler`.
        """
        if alert_name.startswith("_"):
            return False
        member = inspect.getattr_static(self, alert_name, _MISSING)
        if type(self).deliver is not ChannelHandler.deliver:
            return alert_name in self.alerts and member is _MISSING
        if member is _MISSING or hasattr(ChannelHandler, alert_name):
            return False
        return callable(getattr(self, alert_name))

    def deliver(
        self,
        alert_name: str,
        payload: Any,
        template: str,
        recipient: str,
        default_value: Any,
    ) -> None:
        """Deliver *payload* for an alert listed in :attr:`alerts`."""
        raise NotImplementedError(f"{type(self).__name__} does not deliver '{alert_name}'")

    def __getattr__(self, name: str) -> Any:
        # Only reached for missing attributes: route declared alerts to deliver().
        if not name.startswith("_") and name in self.alerts:
            def _deliver(payload: Any, template: str, recipient: str, default_value: Any) -> None:
                self.deliver(name, payload, template, recipient, default_value)

            return _deliver
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
