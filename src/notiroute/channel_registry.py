"""
Channel registry for notiroute.

Stores channel definitions keyed by name, enforces name uniqueness, and
answers group queries.  Groups are not stored; they are derived on demand
from the channels' group tags.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

import structlog

from notiroute.channels.base import ChannelHandler
from notiroute.errors import ConfigurationFrozen, DuplicateChannel, InvalidHandler
from notiroute.models import Channel

logger = structlog.get_logger()


class ChannelRegistry:
    """Name-unique store of :class:`Channel` objects, in registration order.

    Args:
        default_group: Group tag applied when ``register`` is called
            without one.
    """

    def __init__(self, default_group: str = "default") -> None:
        self.default_group = default_group
        self._channels: dict[str, Channel] = {}
        self._frozen = False

    # ── registration ──

    def register(
        self,
        name: str,
        handler: Any,
        group: str | None = None,
        options: dict[str, Any] | None = None,
    ) -> Channel:
        """Create and insert a channel.

        Raises:
            DuplicateChannel: *name* is already registered.
        """
        channel = Channel(
            name=name,
            group=group or self.default_group,
            handler=handler,
            options=options or {},
        )
        return self.add(channel)

    def add(self, channel: Channel) -> Channel:
        """Insert an already constructed *channel*.

        Raises:
            DuplicateChannel: a channel with the same name exists.
            InvalidHandler: the handler is a ChannelHandler class.
        """
        self.check_new(channel.name, channel.handler)
        self._channels[channel.name] = channel
        logger.debug("channel_registered", channel=channel.name, group=channel.group)
        return channel

    def check_new(self, name: str, handler: Any) -> None:
        """Raise if a channel called *name* served by *handler* cannot be added.

        A class is accepted as a handler unless it is a
        :class:`ChannelHandler` subclass, whose alert methods need an instance.
        """
        if self._frozen:
            raise ConfigurationFrozen("register channel")
        if name in self._channels:
            raise DuplicateChannel(name)
        if isinstance(handler, type) and issubclass(handler, ChannelHandler):
            raise InvalidHandler(name, handler)

    def freeze(self) -> None:
        self._frozen = True

    # ── queries ──

    def lookup(self, name: str) -> Channel | None:
        """Return the channel called *name*, or ``None``."""
        return self._channels.get(name)

    def groups(self) -> set[str]:
        """Return every group tag currently in use."""
        return {channel.group for channel in self._channels.values()}

    def by_group(self, group: str) -> list[Channel]:
        """Return the channels tagged *group*, in registration order.

        An unknown group yields an empty list.
        """
        return [channel for channel in self._channels.values() if channel.group == group]

    @property
    def channels(self) -> Mapping[str, Channel]:
        """Read-only view of all channels keyed by name."""
        return MappingProxyType(self._channels)

    def __contains__(self, name: object) -> bool:
        return name in self._channels

    def __iter__(self) -> Iterator[Channel]:
        return iter(self._channels.values())

    def __len__(self) -> int:
        return len(self._channels)
