"""Ordered listener registry."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

Listener = Callable[[Any], None]
Unobserve = Callable[[], None]


@dataclass(eq=False, slots=True)
class _Entry:
    """One registration.

    Compared by identity so that registering the same function twice yields
    two independently removable entries.
    """

    listener: Listener
    removed: bool = False


class ListenerRegistry:
    """Listeners notified in registration order.

    Each notification round walks the entries present when it started.
    Entries added during a round wait for the next one; entries removed
    during a round are skipped if they have not been reached yet.
    """

    def __init__(self) -> None:
        self._entries: list[_Entry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def observe(self, listener: Listener) -> Unobserve:
        """Register *listener* and return a function that removes it.

        Calling the returned function more than once is a no-op.
        """
        entry = _Entry(listener)
        self._entries.append(entry)

        def unobserve() -> None:
            if entry.removed:
                return
            entry.removed = True
            self._entries.remove(entry)

        return unobserve

    def notify(self, subject: Any) -> None:
        """Call every listener with *subject*.

        Exceptions are not caught: the first failing listener stops the
        round and the error propagates to the caller.
        """
        for entry in tuple(self._entries):
            if not entry.removed:
                entry.listener(subject)
