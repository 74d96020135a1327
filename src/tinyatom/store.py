"""State holder for a single atom.

The store is the only component that replaces the atom's state.  Merge
semantics are pluggable; the default is a shallow key overwrite.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

MergeFunc = Callable[[Any, Any], Any]


def merge_shallow(state: Mapping[str, Any], delta: Mapping[str, Any] | None) -> dict[str, Any]:
    """Return a new dict holding *state* overlaid with *delta*.

    Keys in the delta overwrite; keys only present in *state* are kept.
    A ``None`` delta yields an unchanged copy.  Neither argument is modified.
    """
    merged = dict(state)
    if delta is not None:
        merged.update(delta)
    return merged


class Store:
    """Holds the current state and applies deltas through a merge function.

    ``get()`` after ``merge_update(delta)`` returns exactly what the merge
    function produced; no normalization is applied on top.
    """

    def __init__(self, initial_state: Any, merge: MergeFunc | None = None) -> None:
        self._state = initial_state
        self._merge: MergeFunc = merge or merge_shallow

    def get(self) -> Any:
        return self._state

    def merge_update(self, delta: Any) -> Any:
        """Replace the state with ``merge(state, delta)``.

        Returns the previous state.
        """
        prev_state = self._state
        self._state = self._merge(prev_state, delta)
        return prev_state
