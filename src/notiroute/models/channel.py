"""
Channel model for notiroute.

A channel is a named delivery mechanism: a group tag used for fan-out
targeting plus the handler object that services alerts by name.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Channel(BaseModel):
    """A registered delivery channel.

    Attributes:
        name: Unique channel name.
        group: Group tag shared with sibling channels.
        handler: Object exposing one callable per handled alert.
        options: Opaque channel options, passed through untouched.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Unique channel name.")
    group: str = Field(default="default", min_length=1, description="Group tag.")
    handler: Any = Field(..., repr=False, description="Alert handler object.")
    options: dict[str, Any] = Field(
        default_factory=dict,
        description="Opaque channel options.",
    )
