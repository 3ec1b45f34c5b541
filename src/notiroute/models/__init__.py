"""
Data models for notiroute.

Channels, scopes, alerts, notifiers (with their tagged group/channel
target) and per-channel default values.
"""

from notiroute.models.alert import (
    ANY_CHANNEL,
    Alert,
    ChannelTarget,
    DefaultValue,
    GroupTarget,
    Notifier,
    NotifierTarget,
    ProductGroup,
    Scope,
)
from notiroute.models.channel import Channel

__all__ = [
    "ANY_CHANNEL",
    "Alert",
    "Channel",
    "ChannelTarget",
    "DefaultValue",
    "GroupTarget",
    "Notifier",
    "NotifierTarget",
    "ProductGroup",
    "Scope",
]
