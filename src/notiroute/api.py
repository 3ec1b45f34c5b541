"""
Top-level entry points for notiroute.

``configure()`` builds, validates and publishes a configuration;
``configuration()`` returns the published one; ``notify()`` dispatches
through an explicitly passed configuration or, failing that, the
published one.  Configuring again replaces the published configuration
(last write wins).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from notiroute import registry
from notiroute.builder import ConfigBuilder
from notiroute.config import Settings
from notiroute.dispatcher import Dispatcher
from notiroute.opt_in import OptInProvider
from notiroute.registry import UNSET, Configuration


def configure(
    body: Callable[[ConfigBuilder], Any] | None = None,
    *,
    settings: Settings | None = None,
    default_value: Any = UNSET,
    opt_in_provider: OptInProvider | None = None,
) -> Configuration:
    """Build a configuration with *body*, validate it, and publish it.

    Any error raised by *body*, a hook, or validation propagates and
    leaves the previously published configuration in place.
    """
    builder = ConfigBuilder(
        settings,
        default_value=default_value,
        opt_in_provider=opt_in_provider,
    )
    if body is not None:
        body(builder)
    return registry.publish(builder.build())


def configuration() -> Configuration:
    """Return the published configuration.

    Raises:
        MissingConfiguration: :func:`configure` has not been called.
    """
    return registry.current()


def reset_configuration() -> None:
    """Unpublish the current configuration."""
    registry.reset()


def notify(alert_name: str, payload: Any, configuration: Configuration | None = None) -> None:
    """Dispatch *payload* for *alert_name*.

    Raises:
        InvalidAlert: the alert is not configured.
        MissingConfiguration: no *configuration* given and none published.
    """
    config = configuration if configuration is not None else registry.current()
    Dispatcher(config).notify(alert_name, payload)
