from __future__ import annotations

from typing import Any

import pytest

from tinyatom.observers import ListenerRegistry


def test_notify_in_registration_order() -> None:
    registry = ListenerRegistry()
    calls: list[tuple[str, Any]] = []
    registry.observe(lambda s: calls.append(("first", s)))
    registry.observe(lambda s: calls.append(("second", s)))
    registry.observe(lambda s: calls.append(("third", s)))

    registry.notify("subject")

    assert calls == [("first", "subject"), ("second", "subject"), ("third", "subject")]


def test_unobserve_is_idempotent() -> None:
    registry = ListenerRegistry()
    calls: list[Any] = []
    unobserve = registry.observe(calls.append)

    unobserve()
    unobserve()
    registry.notify(1)

    assert calls == []
    assert len(registry) == 0


def test_duplicate_registrations_are_independent() -> None:
    registry = ListenerRegistry()
    calls: list[Any] = []
    unobserve_first = registry.observe(calls.append)
    registry.observe(calls.append)

    registry.notify(1)
    assert calls == [1, 1]

    unobserve_first()
    registry.notify(2)
    assert calls == [1, 1, 2]
    assert len(registry) == 1


def test_listener_added_during_round_waits_for_next_round() -> None:
    registry = ListenerRegistry()
    calls: list[str] = []

    def adder(_: Any) -> None:
        calls.append("adder")
        registry.observe(lambda _: calls.append("late"))

    registry.observe(adder)
    registry.notify(None)
    assert calls == ["adder"]


def test_listener_removed_during_round_is_skipped() -> None:
    registry = ListenerRegistry()
    calls: list[str] = []
    unobserve_holder: list[Any] = []

    def remover(_: Any) -> None:
        calls.append("remover")
        unobserve_holder[0]()

    registry.observe(remover)
    unobserve_holder.append(registry.observe(lambda _: calls.append("removed")))

    registry.notify(None)
    assert calls == ["remover"]


def test_failing_listener_stops_round_and_propagates() -> None:
    registry = ListenerRegistry()
    calls: list[str] = []

    def boom(_: Any) -> None:
        raise RuntimeError("listener failed")

    registry.observe(lambda _: calls.append("before"))
    registry.observe(boom)
    registry.observe(lambda _: calls.append("after"))

    with pytest.raises(RuntimeError, match="listener failed"):
        registry.notify(None)

    assert calls == ["before"]


def test_stale_unobserve_does_not_remove_duplicate_entry() -> None:
    registry = ListenerRegistry()
    calls: list[Any] = []

    def listener(value: Any) -> None:
        calls.append(value)

    unobserve_first = registry.observe(listener)
    unobserve_first()
    registry.observe(listener)
    unobserve_first()

    registry.notify(1)
    assert calls == [1]
    assert len(registry) == 1
