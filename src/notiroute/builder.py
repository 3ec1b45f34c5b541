"""
Configuration builder for notiroute.

The builder is an explicit object handed to nested configuration
functions; each level narrows it to the context it configures::

    def post_alerts(scope: ScopeBuilder) -> None:
        scope.alert("new_signup", lambda alert: alert.notify("users").on("default"))

    def build(config: ConfigBuilder) -> None:
        config.channel("email", EmailHandler())
        config.scope("post", post_alerts)

    notiroute.configure(build)

Hooks fire at registration boundaries: ``pre_channel_registration`` with
the constructed channel before it is stored and
``post_channel_registration`` once it is; ``pre_alert_registration``
before an alert's body runs and ``post_alert_registration`` after it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

import structlog

from notiroute.config import Settings
from notiroute.errors import ConfigurationFrozen
from notiroute.hooks import HookEvent, HookPipeline
from notiroute.models import Alert, Channel, DefaultValue, Notifier, ProductGroup, Scope
from notiroute.opt_in import OptInProvider
from notiroute.registry import UNSET, Configuration

logger = structlog.get_logger()


class NotifierBuilder:
    """Targets a freshly added notifier with :meth:`on`."""

    def __init__(self, config: Configuration, notifier: Notifier) -> None:
        self._config = config
        self.notifier = notifier

    def on(self, target: str) -> Notifier:
        """Deliver to the channel group, or the single channel, named *target*.

        A name that is both a group and a channel selects the group.
        """
        return self._config.alert_graph.set_target(self.notifier, target)


class AlertBuilder:
    """Configures one alert: notifiers, defaults and applicability."""

    def __init__(self, config: Configuration, alert: Alert) -> None:
        self._config = config
        self.alert = alert

    def notify(self, recipient: str, template: str = "") -> NotifierBuilder:
        notifier = self._config.alert_graph.add_notifier(self.alert, recipient, template)
        return NotifierBuilder(self._config, notifier)

    def default(self, value: Any, on: str | None = None) -> DefaultValue:
        """Set the alert-wide default, or the default for channel *on*."""
        return self._config.alert_graph.set_default(self.alert, value, on_channel=on)

    @property
    def applies(self) -> ProductGroup:
        return self.alert.applicability

    @property
    def tags(self) -> tuple[str, ...]:
        return self.alert.tags


class ScopeBuilder:
    """Declares the alerts of one scope."""

    def __init__(self, config: Configuration, scope: Scope) -> None:
        self._config = config
        self.scope = scope

    def alert(
        self,
        name: str,
        body: Callable[[AlertBuilder], Any] | None = None,
        *,
        tags: Iterable[str] = (),
        constructor_name: str | None = None,
    ) -> Alert:
        """Declare alert *name* and run *body* against it."""
        alert = self._config.alert_graph.define_alert(
            self.scope, name, tags=tags, constructor_name=constructor_name
        )
        self._config.hooks.fire(HookEvent.PRE_ALERT_REGISTRATION, alert)
        if body is not None:
            body(AlertBuilder(self._config, alert))
        self._config.hooks.fire(HookEvent.POST_ALERT_REGISTRATION, alert)
        return alert


class ConfigBuilder:
    """Builds a :class:`Configuration` and validates it on :meth:`build`.

    Args:
        settings: Process settings; defaults to :func:`~notiroute.config.get_settings`.
        default_value: Global default overriding ``settings.default_value``.
        opt_in_provider: Opt-in storage; defaults to an in-memory provider.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        default_value: Any = UNSET,
        opt_in_provider: OptInProvider | None = None,
    ) -> None:
        self._config = Configuration(
            settings,
            default_value=default_value,
            opt_in_provider=opt_in_provider,
        )

    @property
    def configuration(self) -> Configuration:
        """The configuration under construction."""
        return self._config

    @property
    def hooks(self) -> HookPipeline:
        return self._config.hooks

    @property
    def default_value(self) -> Any:
        return self._config.alert_graph.default_value

    @default_value.setter
    def default_value(self, value: Any) -> None:
        # Only alerts declared after this point pick the new value up.
        if self._config.frozen:
            raise ConfigurationFrozen("set default value")
        self._config.alert_graph.default_value = value

    @property
    def opt_in_provider(self) -> OptInProvider:
        return self._config.opt_in_provider

    @opt_in_provider.setter
    def opt_in_provider(self, provider: OptInProvider) -> None:
        if self._config.frozen:
            raise ConfigurationFrozen("set opt-in provider")
        self._config.opt_in_provider = provider

    def channel(
        self,
        name: str,
        handler: Any,
        group: str | None = None,
        options: dict[str, Any] | None = None,
    ) -> Channel:
        """Register channel *name*, serviced by *handler*."""
        registry = self._config.channel_registry
        registry.check_new(name, handler)
        channel = Channel(
            name=name,
            group=group or registry.default_group,
            handler=handler,
            options=options or {},
        )
        self._config.hooks.fire(HookEvent.PRE_CHANNEL_REGISTRATION, channel)
        registry.add(channel)
        self._config.hooks.fire(HookEvent.POST_CHANNEL_REGISTRATION, channel)
        return channel

    def scope(
        self,
        name: str,
        body: Callable[[ScopeBuilder], Any] | None = None,
        *,
        payload_class: Any = None,
        check_constructor: bool | None = None,
    ) -> Scope:
        """Define scope *name* and run *body* to declare its alerts."""
        if check_constructor is None:
            check_constructor = self._config.settings.check_constructor
        scope = self._config.alert_graph.define_scope(
            name,
            payload_class=payload_class,
            check_constructor=check_constructor,
        )
        if body is not None:
            body(ScopeBuilder(self._config, scope))
        return scope

    def build(self) -> Configuration:
        """Validate and freeze the configuration, then return it."""
        self._config.validate()
        self._config.freeze()
        logger.info(
            "configuration_built",
            channels=len(self._config.channels),
            scopes=len(self._config.scopes),
            alerts=len(self._config.alerts),
        )
        return self._config
