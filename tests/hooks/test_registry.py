"""Tests for HookRegistry: ordering, folding, and config bindings."""

from __future__ import annotations

from typing import Any

import pytest

from restcore.errors import HookReferenceError
from restcore.hooks.registry import Channel, HookRegistry

OWNER = object()


def record_event(server: Any, db: Any, cache: Any) -> None:
    """Importable event callback used by reference-binding tests."""
    calls.append(("record_event", server, db, cache))


def double(server: Any, content: Any, db: Any, cache: Any) -> Any:
    return content * 2


calls: list[tuple[Any, ...]] = []


@pytest.fixture(autouse=True)
def _reset_calls() -> None:
    calls.clear()


class _Appender:
    """Stateful filter that records when it ran and appends its tag."""

    def __init__(self, tag: str, seen: list[str]) -> None:
        self.tag = tag
        self.seen = seen

    def __call__(self, server: Any, content: list[str], db: Any, cache: Any) -> list[str]:
        self.seen.append(self.tag)
        return [*content, self.tag]


class TestTriggerEvent:
    def test_no_listeners_is_noop(self) -> None:
        registry = HookRegistry(owner=OWNER)
        registry.trigger_event("nothing.bound", "db", "cache")
        assert calls == []

    def test_passes_owner_db_cache(self) -> None:
        registry = HookRegistry(owner=OWNER)
        seen: list[tuple[Any, ...]] = []
        registry.bind("request.start", lambda s, d, c: seen.append((s, d, c)))
        registry.trigger_event("request.start", "db", "cache")
        assert seen == [(OWNER, "db", "cache")]

    def test_fires_in_registration_order(self) -> None:
        registry = HookRegistry()
        order: list[str] = []
        registry.bind("evt", lambda s, d, c: order.append("first"))
        registry.bind("evt", lambda s, d, c: order.append("second"))
        registry.bind("evt", lambda s, d, c: order.append("third"))
        registry.trigger_event("evt", None, None)
        assert order == ["first", "second", "third"]

    def test_same_callback_bound_twice_fires_twice(self) -> None:
        registry = HookRegistry()
        order: list[str] = []

        def a(s: Any, d: Any, c: Any) -> None:
            order.append("a")

        def b(s: Any, d: Any, c: Any) -> None:
            order.append("b")

        registry.bind("evt", a)
        registry.bind("evt", b)
        registry.bind("evt", a)
        registry.trigger_event("evt", None, None)
        assert order == ["a", "b", "a"]

    def test_return_values_discarded(self) -> None:
        registry = HookRegistry()
        registry.bind("evt", lambda s, d, c: "ignored")
        assert registry.trigger_event("evt", None, None) is None

    def test_events_do_not_fire_filters(self) -> None:
        registry = HookRegistry()
        registry.bind("shared", lambda s, content, d, c: pytest.fail("filter fired"), Channel.FILTER)
        registry.trigger_event("shared", None, None)

    def test_exception_propagates(self) -> None:
        registry = HookRegistry()

        def boom(s: Any, d: Any, c: Any) -> None:
            raise RuntimeError("listener failed")

        registry.bind("evt", boom)
        with pytest.raises(RuntimeError, match="listener failed"):
            registry.trigger_event("evt", None, None)


class TestApplyFilter:
    def test_no_filters_is_identity(self) -> None:
        registry = HookRegistry()
        content = {"k": "v"}
        assert registry.apply_filter("nothing.bound", content, None, None) is content

    def test_left_fold_in_registration_order(self) -> None:
        registry = HookRegistry()
        seen: list[str] = []
        registry.bind("body", _Appender("a", seen), "filter")
        registry.bind("body", _Appender("b", seen), "filter")
        result = registry.apply_filter("body", [], None, None)
        assert result == ["a", "b"]
        assert seen == ["a", "b"]

    def test_reordering_changes_result(self) -> None:
        forward, backward = HookRegistry(), HookRegistry()
        seen_fwd: list[str] = []
        seen_bwd: list[str] = []
        forward.bind("body", _Appender("x", seen_fwd), "filter")
        forward.bind("body", _Appender("y", seen_fwd), "filter")
        backward.bind("body", _Appender("y", seen_bwd), "filter")
        backward.bind("body", _Appender("x", seen_bwd), "filter")

        assert forward.apply_filter("body", [], None, None) == ["x", "y"]
        assert backward.apply_filter("body", [], None, None) == ["y", "x"]
        assert seen_fwd == ["x", "y"]
        assert seen_bwd == ["y", "x"]

    def test_non_commutative_fold(self) -> None:
        registry = HookRegistry()
        registry.bind("n", lambda s, v, d, c: v + 3, Channel.FILTER)
        registry.bind("n", lambda s, v, d, c: v * 10, Channel.FILTER)
        assert registry.apply_filter("n", 1, None, None) == 40

    def test_filter_receives_owner_db_cache(self) -> None:
        registry = HookRegistry(owner=OWNER)
        seen: list[tuple[Any, ...]] = []

        def capture(s: Any, content: Any, d: Any, c: Any) -> Any:
            seen.append((s, d, c))
            return content

        registry.bind("f", capture, "filter")
        registry.apply_filter("f", "content", "db", "cache")
        assert seen == [(OWNER, "db", "cache")]


class TestBind:
    def test_returns_binding_with_increasing_order(self) -> None:
        registry = HookRegistry()
        first = registry.bind("a", double, "filter")
        second = registry.bind("b", record_event)
        assert first.channel is Channel.FILTER
        assert second.channel is Channel.EVENT
        assert first.order < second.order

    def test_unknown_channel_rejected(self) -> None:
        registry = HookRegistry()
        with pytest.raises(ValueError):
            registry.bind("a", double, "action")

    def test_non_callable_rejected(self) -> None:
        registry = HookRegistry()
        with pytest.raises(TypeError):
            registry.bind("a", 42)  # type: ignore[arg-type]

    def test_string_reference_resolved(self) -> None:
        registry = HookRegistry(owner=OWNER)
        registry.bind("evt", f"{__name__}:record_event")
        registry.trigger_event("evt", "db", "cache")
        assert calls == [("record_event", OWNER, "db", "cache")]

    def test_bad_reference_raises(self) -> None:
        registry = HookRegistry()
        with pytest.raises(HookReferenceError):
            registry.bind("evt", f"{__name__}:does_not_exist")

    def test_bindings_snapshot(self) -> None:
        registry = HookRegistry()
        registry.bind("b", double, "filter")
        registry.bind("a", record_event)
        registry.bind("b", record_event)
        assert [(b.channel, b.name) for b in registry.bindings()] == [
            (Channel.FILTER, "b"),
            (Channel.EVENT, "a"),
            (Channel.EVENT, "b"),
        ]
        assert [b.name for b in registry.bindings("event")] == ["a", "b"]
        assert registry.has_listeners("b", "filter")
        assert not registry.has_listeners("a", "filter")


class TestBindFromConfig:
    def test_events_and_filters(self) -> None:
        registry = HookRegistry(owner=OWNER)
        registry.bind_from_config(
            events=[{"request.start": f"{__name__}:record_event"}],
            filters=[{"number": f"{__name__}:double"}, {"number": double}],
        )
        registry.trigger_event("request.start", None, None)
        assert calls == [("record_event", OWNER, None, None)]
        assert registry.apply_filter("number", 3, None, None) == 12

    def test_empty_config_binds_nothing(self) -> None:
        registry = HookRegistry()
        registry.bind_from_config([], [])
        assert registry.bindings() == []
