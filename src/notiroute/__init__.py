"""
notiroute: configuration-driven notification routing.

Declare channels, scopes and alerts once, wire each alert to recipients
on channel groups or single channels, then dispatch alerts by name.
"""

from notiroute.api import configuration, configure, notify, reset_configuration
from notiroute.builder import AlertBuilder, ConfigBuilder, NotifierBuilder, ScopeBuilder
from notiroute.channels import ChannelHandler
from notiroute.config import Settings, get_settings
from notiroute.dispatcher import Delivery, Dispatcher
from notiroute.errors import (
    BadConfiguration,
    InvalidAlert,
    MissingConfiguration,
    NotirouteError,
)
from notiroute.hooks import HookEvent
from notiroute.registry import Configuration

__all__ = [
    "AlertBuilder",
    "BadConfiguration",
    "ChannelHandler",
    "ConfigBuilder",
    "Configuration",
    "Delivery",
    "Dispatcher",
    "HookEvent",
    "InvalidAlert",
    "MissingConfiguration",
    "NotifierBuilder",
    "NotirouteError",
    "ScopeBuilder",
    "Settings",
    "configuration",
    "configure",
    "get_settings",
    "notify",
    "reset_configuration",
]
