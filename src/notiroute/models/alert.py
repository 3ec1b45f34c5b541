"""
Scope, alert, notifier and default-value models for notiroute.

``Scope``, ``Alert`` and ``Notifier`` are mutable while the configuration
is being built and are never touched again once it is frozen.  Notifier
targets and default values are Pydantic models; the target is a tagged
union decided once, when the notifier is pointed at a group or a channel.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

ANY_CHANNEL = "_any_"


class GroupTarget(BaseModel):
    """Notifier target fanning out to every channel in a group."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["group"] = "group"
    group: str


class ChannelTarget(BaseModel):
    """Notifier target addressing exactly one channel."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["channel"] = "channel"
    channel: str


NotifierTarget = Annotated[Union[GroupTarget, ChannelTarget], Field(discriminator="kind")]


class DefaultValue(BaseModel):
    """A fallback payload value for one channel, or for ``_any_`` channel.

    Attributes:
        channel: Channel name, or :data:`ANY_CHANNEL`.
        value: Opaque default handed to the channel handler.
    """

    model_config = ConfigDict(validate_assignment=True)

    channel: str = Field(default=ANY_CHANNEL, min_length=1)
    value: Any = None


@dataclass(slots=True)
class ProductGroup:
    """Products an alert applies to (pass-through applicability set).

    An empty ``included`` list means "every product not excluded".
    """

    included: list[str] = field(default_factory=list)
    excluded: list[str] = field(default_factory=list)

    def to(self, *products: str) -> ProductGroup:
        for product in products:
            if product not in self.included:
                self.included.append(product)
        return self

    def not_to(self, *products: str) -> ProductGroup:
        for product in products:
            if product not in self.excluded:
                self.excluded.append(product)
        return self

    def allows(self, product: str) -> bool:
        if product in self.excluded:
            return False
        return not self.included or product in self.included

    @property
    def is_empty(self) -> bool:
        """No product included or excluded, so the alert applies everywhere."""
        return not self.included and not self.excluded


@dataclass(eq=False, slots=True)
class Notifier:
    """A recipient role paired with a channel group or a single channel.

    Attributes:
        recipient: Recipient role key (e.g. ``"users"``).
        target: Where deliveries for this recipient go.
        template: Opaque template identifier.
    """

    recipient: str
    target: NotifierTarget
    template: str = ""


@dataclass(eq=False, slots=True)
class Alert:
    """A named event within a scope.

    Attributes:
        name: Globally unique alert name; also the handler method name.
        scope: Owning scope (back-reference).
        constructor_name: Payload factory checked when the scope asks for it.
        tags: Free-form tags.
        notifiers: Recipient → notifier, in declaration order.
        defaults: Channel name (or ``_any_``) → default value.
        applicability: Products this alert applies to.
    """

    name: str
    scope: Scope = field(repr=False)
    constructor_name: str = ""
    tags: tuple[str, ...] = ()
    notifiers: dict[str, Notifier] = field(default_factory=dict)
    defaults: dict[str, DefaultValue] = field(default_factory=dict)
    applicability: ProductGroup = field(default_factory=ProductGroup)

    def __post_init__(self) -> None:
        if not self.constructor_name:
            self.constructor_name = self.name

    @property
    def default_value(self) -> Any:
        """The alert-wide (``_any_``) default."""
        return self.defaults[ANY_CHANNEL].value


@dataclass(eq=False, slots=True)
class Scope:
    """A named container of related alerts.

    Attributes:
        name: Unique scope name.
        alerts: Alert name → alert, in declaration order.
        payload_class: Payload type checked for alert-named constructors.
        check_constructor: Whether that check runs during validation.
    """

    name: str
    alerts: dict[str, Alert] = field(default_factory=dict, repr=False)
    payload_class: Any = None
    check_constructor: bool = False
