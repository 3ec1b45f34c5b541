"""
Tests for lifecycle hooks.

Validates hook registration, ordering, fail-fast firing, and the points
at which the builder fires each event.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

import notiroute
from notiroute.errors import ConfigurationFrozen, DuplicateChannel, UnknownHookEvent
from notiroute.hooks import HookEvent, HookPipeline
from notiroute.models import Alert, Channel


class TestHookPipeline:
    """Tests for HookPipeline add / fetch / fire."""

    def test_handlers_are_stored_per_event(self) -> None:
        hooks = HookPipeline()
        first, second, third = MagicMock(), MagicMock(), MagicMock()
        hooks.add(HookEvent.PRE_CHANNEL_REGISTRATION, first)
        hooks.add("post_channel_registration", second)
        hooks.add("pre_channel_registration", third)

        assert len(hooks) == 2
        assert hooks.fetch("pre_channel_registration") == [first, third]
        assert hooks.fetch(HookEvent.POST_CHANNEL_REGISTRATION) == [second]

    def test_fetch_empty_event(self) -> None:
        assert HookPipeline().fetch(HookEvent.PRE_ALERT_REGISTRATION) == []

    def test_unknown_event_rejected(self) -> None:
        with pytest.raises(UnknownHookEvent):
            HookPipeline().add("bad_hook", MagicMock())

    def test_fire_in_registration_order(self) -> None:
        hooks = HookPipeline()
        order: list[str] = []
        hooks.add("pre_alert_registration", lambda subject: order.append(f"a:{subject}"))
        hooks.add("pre_alert_registration", lambda subject: order.append(f"b:{subject}"))
        hooks.fire(HookEvent.PRE_ALERT_REGISTRATION, "x")
        assert order == ["a:x", "b:x"]

    def test_fire_without_handlers_is_noop(self) -> None:
        HookPipeline().fire(HookEvent.POST_ALERT_REGISTRATION, object())

    def test_failure_stops_remaining_handlers(self) -> None:
        hooks = HookPipeline()
        after = MagicMock()
        hooks.add("post_alert_registration", MagicMock(side_effect=RuntimeError("boom")))
        hooks.add("post_alert_registration", after)
        with pytest.raises(RuntimeError, match="boom"):
            hooks.fire("post_alert_registration", object())
        after.assert_not_called()

    def test_frozen_pipeline_rejects_add(self) -> None:
        hooks = HookPipeline()
        hooks.freeze()
        with pytest.raises(ConfigurationFrozen):
            hooks.add("pre_alert_registration", MagicMock())


class TestHookFiringPoints:
    """Tests for where the builder fires hooks."""

    def test_configuration_has_hooks(self, settings) -> None:
        seen = []
        notiroute.configure(lambda config: seen.append(config.hooks), settings=settings)
        assert isinstance(seen[0], HookPipeline)
        assert notiroute.configuration().hooks is seen[0]

    def test_channel_hooks_bracket_registration(self, settings, make_handler) -> None:
        events: list[tuple[str, str, bool]] = []

        def build(config) -> None:
            registry = config.configuration.channel_registry
            config.hooks.add(
                "pre_channel_registration",
                lambda ch: events.append(("pre", ch.name, ch.name in registry)),
            )
            config.hooks.add(
                "post_channel_registration",
                lambda ch: events.append(("post", ch.name, ch.name in registry)),
            )
            config.channel("email", make_handler("email"))
            config.channel("slack", make_handler("slack"))

        notiroute.configure(build, settings=settings)
        assert events == [
            ("pre", "email", False),
            ("post", "email", True),
            ("pre", "slack", False),
            ("post", "slack", True),
        ]

    def test_channel_hooks_receive_channel(self, settings, make_handler) -> None:
        pre = MagicMock()

        def build(config) -> None:
            config.hooks.add("pre_channel_registration", pre)
            config.channel("email", make_handler("email"))

        notiroute.configure(build, settings=settings)
        (subject,), _ = pre.call_args
        assert isinstance(subject, Channel)
        assert subject.name == "email"

    def test_duplicate_channel_fires_no_hooks(self, settings, make_handler) -> None:
        pre, post = MagicMock(), MagicMock()

        def build(config) -> None:
            config.channel("email", make_handler("email"))
            config.hooks.add("pre_channel_registration", pre)
            config.hooks.add("post_channel_registration", post)
            config.channel("email", make_handler("email"))

        with pytest.raises(DuplicateChannel):
            notiroute.configure(build, settings=settings)
        pre.assert_not_called()
        post.assert_not_called()

    def test_alert_hooks_see_partial_then_full_alert(self, settings, make_handler) -> None:
        notifier_counts: dict[str, int] = {}

        def record(stage: str):
            def _hook(alert: Alert) -> None:
                notifier_counts[stage] = len(alert.notifiers)

            return _hook

        def build(config) -> None:
            config.hooks.add("pre_alert_registration", record("pre"))
            config.hooks.add("post_alert_registration", record("post"))
            config.channel("email", make_handler("email", ["new_signup"]))

            def signup(alert) -> None:
                alert.notify("users").on("default")
                alert.notify("owners").on("email")

            config.scope("post", lambda scope: scope.alert("new_signup", signup))

        notiroute.configure(build, settings=settings)
        assert notifier_counts == {"pre": 0, "post": 2}

    def test_failing_hook_aborts_configure(self, settings, make_handler) -> None:
        def build(config) -> None:
            config.hooks.add("post_channel_registration", MagicMock(side_effect=ValueError("nope")))
            config.channel("email", make_handler("email"))

        with pytest.raises(ValueError, match="nope"):
            notiroute.configure(build, settings=settings)
        with pytest.raises(notiroute.MissingConfiguration):
            notiroute.configuration()

    def test_hooks_frozen_after_build(self, settings) -> None:
        config = notiroute.configure(settings=settings)
        with pytest.raises(ConfigurationFrozen):
            config.hooks.add("pre_alert_registration", MagicMock())
