"""Action handler registry and the dictionary-based evolution function."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

from tinyatom.exceptions import UnknownActionError

if TYPE_CHECKING:
    from tinyatom.models import Action

#: ``handler(get, split, payload)``; expected to call ``split`` with a delta.
ActionHandler = Callable[[Callable[[], Any], Callable[..., None], Any], None]


class ActionRegistry(Mapping[str, ActionHandler]):
    """Read-only mapping from action type to handler.

    Lookup of an unregistered type raises :class:`UnknownActionError`.
    Only the owning atom adds handlers, through :meth:`_merge`.
    """

    def __init__(self, handlers: Mapping[str, ActionHandler] | None = None) -> None:
        self._handlers: dict[str, ActionHandler] = dict(handlers or {})

    def __getitem__(self, action_type: str) -> ActionHandler:
        try:
            return self._handlers[action_type]
        except KeyError:
            raise UnknownActionError(action_type) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"ActionRegistry({sorted(self._handlers)!r})"

    def _merge(self, more: Mapping[str, ActionHandler]) -> None:
        # Last write wins for duplicate types.
        self._handlers.update(more)


def default_evolve(
    get: Callable[[], Any],
    split: Callable[..., None],
    action: Action,
    actions: Mapping[str, ActionHandler],
) -> None:
    """Route *action* to ``actions[action.type]``.

    The handler receives ``(get, split, payload)`` and is responsible for
    calling ``split`` with a state delta.  ``payload`` is ``None`` when the
    action was dispatched without one.
    """
    handler = actions[action.type]
    handler(get, split, action.payload)
