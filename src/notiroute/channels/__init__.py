"""
Channel handler package for notiroute.

Contains the handler base class and capability check, plus the bundled
logging and webhook handlers.
"""

from .base import AlertCapable, ChannelHandler, handles_alert
from .log_channel import LogChannel
from .webhook_channel import WebhookChannel

__all__ = [
    "AlertCapable",
    "ChannelHandler",
    "LogChannel",
    "WebhookChannel",
    "handles_alert",
]
