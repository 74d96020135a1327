"""Custom exception hierarchy for tinyatom."""

from __future__ import annotations


class AtomError(Exception):
    """Base exception for all tinyatom errors."""


class AtomConfigError(AtomError):
    """Invalid atom options (e.g. a non-callable ``merge``)."""


class UnknownActionError(AtomError, KeyError):
    """No handler is registered for the dispatched action type.

    Raised by the actions registry at lookup time, which under the default
    evolution function means at dispatch time.  Subclasses :class:`KeyError`
    so the registry keeps ordinary ``Mapping`` semantics (``get``, ``in``).
    """

    def __init__(self, action_type: str) -> None:
        self.action_type = action_type
        super().__init__(action_type)

    def __str__(self) -> str:
        return f"no handler registered for action type {self.action_type!r}"
