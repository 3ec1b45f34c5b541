"""
Webhook channel for notiroute.

Sends an HTTP POST with a JSON body for every delivery.  The body carries
the alert name, recipient, template, resolved default value and the
payload as given (it must be JSON-serialisable, or a Pydantic model).

HTTP failures raise :class:`httpx.HTTPStatusError` /
:class:`httpx.TransportError` to the ``notify()`` caller; there are no
retries.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import httpx
import structlog
from pydantic import BaseModel

from .base import ChannelHandler

logger = structlog.get_logger()

_DEFAULT_TIMEOUT_S = 10.0


class WebhookChannel(ChannelHandler):
    """POST deliveries for a fixed set of alerts to a webhook URL.

    Args:
        url: Destination webhook URL.
        alerts: Alert names this channel services.
        timeout: Per-request timeout in seconds (default 10).
        headers: Optional extra headers to include on every request.
        client: Optional preconfigured ``httpx.Client`` (mainly for tests).
    """

    name: str = "webhook"

    def __init__(
        self,
        url: str,
        alerts: Iterable[str],
        *,
        timeout: float = _DEFAULT_TIMEOUT_S,
        headers: dict[str, str] | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.url = url
        self.alerts = frozenset(alerts)
        self.timeout = timeout
        self.headers = headers or {}
        self._client = client

    def _get_client(self) -> httpx.Client:
        """Return (and lazily create) the shared ``httpx.Client``."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(timeout=self.timeout)
        return self._client

    @staticmethod
    def build_body(
        alert_name: str,
        payload: Any,
        template: str,
        recipient: str,
        default_value: Any,
    ) -> dict[str, Any]:
        """Return the JSON body posted for one delivery."""
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(mode="json")
        return {
            "alert": alert_name,
            "recipient": recipient,
            "template": template,
            "default": default_value,
            "payload": payload,
        }

    def deliver(
        self,
        alert_name: str,
        payload: Any,
        template: str,
        recipient: str,
        default_value: Any,
    ) -> None:
        body = self.build_body(alert_name, payload, template, recipient, default_value)
        client = self._get_client()
        resp = client.post(
            self.url,
            json=body,
            headers={"Content-Type": "application/json", **self.headers},
        )
        resp.raise_for_status()
        logger.info(
            "webhook_delivered",
            webhook_url=self.url,
            alert=alert_name,
            status=resp.status_code,
        )

    def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None and not self._client.is_closed:
            self._client.close()
            self._client = None
