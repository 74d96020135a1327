"""The atom: a minimal synchronous reactive state container.

Usage::

    def evolve(get, split, action, actions):
        split({"count": get()["count"] + 1})

    atom = create_atom({"count": 1}, evolve, lambda atom: print(atom.get()))

    atom.get()                     # {"count": 1}
    atom.split("increment")        # action
    atom.split("increment", {"by": 2})  # action with payload
    atom.split({"count": 0})       # update state directly

Everything runs inline on the caller's stack: listeners and evolution
functions have finished by the time ``split`` returns.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Mapping
from typing import Any

from tinyatom.config import AtomOptions
from tinyatom.exceptions import AtomConfigError
from tinyatom.models import Action, Update
from tinyatom.observers import Listener, ListenerRegistry, Unobserve
from tinyatom.registry import ActionHandler, ActionRegistry, default_evolve
from tinyatom.store import Store
from tinyatom.tracing import ROOT_CONTEXT, DispatchContext, Tracer

_logger = logging.getLogger(__name__)

#: ``evolve(get, split, action, actions)``
EvolveFunc = Callable[[Callable[[], Any], Callable[..., None], Action, Mapping[str, ActionHandler]], None]


class _Unset:
    def __repr__(self) -> str:
        return "<unset>"


_UNSET: Any = _Unset()


class Atom:
    """State container exposing ``get``, ``split``, ``observe`` and ``fuse``.

    Parameters
    ----------
    initial_state : Any
        Initial state.  Falsy values are replaced by an empty dict.
    evolve : callable, mapping or None
        Evolution function ``(get, split, action, actions)``.  A mapping is
        taken as the initial actions registry and evolution falls back to
        :func:`~tinyatom.registry.default_evolve`, as it does when omitted.
    options : AtomOptions, mapping or None
        See :class:`~tinyatom.config.AtomOptions`.
    """

    def __init__(
        self,
        initial_state: Any = None,
        evolve: EvolveFunc | Mapping[str, ActionHandler] | None = None,
        *,
        options: AtomOptions | Mapping[str, Any] | None = None,
    ) -> None:
        opts = AtomOptions.coerce(options)
        self._store = Store(initial_state or {}, opts.merge)
        self._actions = ActionRegistry()
        self._listeners = ListenerRegistry()
        self._seq = 0
        self._tracer = Tracer(opts.debug, self) if opts.debug is not None else None

        if evolve is None:
            self._evolve: EvolveFunc = default_evolve
        elif isinstance(evolve, Mapping):
            self._actions._merge(evolve)
            self._evolve = default_evolve
        elif callable(evolve):
            self._evolve = evolve
        else:
            raise AtomConfigError(f"evolve must be callable or a mapping of handlers, got {type(evolve).__name__}")

    def __repr__(self) -> str:
        return f"<Atom state={self._store.get()!r} listeners={len(self._listeners)} actions={len(self._actions)}>"

    # ------------------------------------------------------------------
    # Public surface
    # ------------------------------------------------------------------

    def get(self) -> Any:
        """Return the current state."""
        return self._store.get()

    def split(self, target: Any, payload: Any = _UNSET) -> None:
        """Dispatch a named action or merge a state delta.

        ``split("type")`` / ``split("type", payload)`` dispatch an action
        through the evolution function.  Any other *target* is merged into
        the state and listeners are notified.
        """
        self._split(ROOT_CONTEXT, target, payload)

    def dispatch(self, action_type: str, payload: Any = _UNSET) -> None:
        """Dispatch a named action (the string form of :meth:`split`)."""
        if not isinstance(action_type, str):
            raise TypeError(f"action type must be a str, got {type(action_type).__name__}")
        self._dispatch(ROOT_CONTEXT, action_type, payload)

    def update(self, delta: Any) -> None:
        """Merge *delta* into the state (the non-string form of :meth:`split`)."""
        self._update(ROOT_CONTEXT, delta)

    def observe(self, listener: Listener) -> Unobserve:
        """Call *listener* with this atom after every update.

        Returns a function that removes this registration.
        """
        return self._listeners.observe(listener)

    def fuse(self, more_state: Any = None, more_actions: Mapping[str, ActionHandler] | None = None) -> None:
        """Add action handlers and/or state to the atom.

        Handlers overwrite existing ones for the same type.  State goes
        through the normal update path, so listeners are notified.
        """
        if more_actions:
            self._actions._merge(more_actions)
            _logger.debug("Fused action handlers: %s", ", ".join(more_actions))
        if more_state:
            self.split(more_state)

    # ------------------------------------------------------------------
    # Dispatch internals
    # ------------------------------------------------------------------

    def _split(self, context: DispatchContext, target: Any, payload: Any = _UNSET) -> None:
        if isinstance(target, str):
            self._dispatch(context, target, payload)
            return
        # payload only applies to named dispatch; ignored for deltas.
        self._update(context, target)

    def _dispatch(self, context: DispatchContext, action_type: str, payload: Any) -> None:
        self._seq += 1
        if payload is _UNSET:
            action = Action(seq=self._seq, type=action_type)
        else:
            action = Action(seq=self._seq, type=action_type, payload=payload)
        _logger.debug("Dispatching action seq=%d type=%s depth=%d", action.seq, action_type, context.depth)

        split: Callable[..., None]
        if self._tracer is not None:
            self._tracer.report_action(action, context)
            split = functools.partial(self._split, context.extend(action))
        else:
            split = self.split
        self._evolve(self.get, split, action, self._actions)

    def _update(self, context: DispatchContext, delta: Any) -> None:
        prev_state = self._store.merge_update(delta)
        if self._tracer is not None:
            self._tracer.report_update(Update(payload=delta), context, prev_state)
        self._listeners.notify(self)


def create_atom(
    initial_state: Any = None,
    evolve: EvolveFunc | Mapping[str, ActionHandler] | None = None,
    render: Listener | AtomOptions | Mapping[str, Any] | None = None,
    options: AtomOptions | Mapping[str, Any] | None = None,
    **kwargs: Any,
) -> Atom:
    """Create an :class:`Atom`.

    *render*, when callable, is registered as the first listener.  A
    non-callable third argument is taken as *options*.  Keyword arguments
    (``merge=``, ``debug=``) override entries in *options*.
    """
    if render is not None and not callable(render):
        options = render or None
        render = None
    atom = Atom(initial_state, evolve, options=AtomOptions.coerce(options, **kwargs))
    if render is not None:
        atom.observe(render)
    return atom
