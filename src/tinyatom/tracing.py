"""Dispatch provenance and debug tracing.

:class:`DispatchContext` carries the chain of ancestor actions for nested
dispatches.  :class:`Tracer` turns dispatches and updates into
:class:`~tinyatom.models.TraceRecord` objects for the user's ``debug``
callable.  :func:`log_tracer` builds a ready-made ``debug`` callable that
writes records to :mod:`logging`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from tinyatom._redact import redact_for_log
from tinyatom.models import Action, TraceKind, TraceRecord, Update

DebugFunc = Callable[[TraceRecord], Any]


@dataclass(frozen=True, slots=True)
class DispatchContext:
    """Ancestor actions of the current dispatch, outermost first."""

    source_actions: tuple[Action, ...] = ()

    def extend(self, action: Action) -> DispatchContext:
        return DispatchContext(self.source_actions + (action,))

    @property
    def depth(self) -> int:
        return len(self.source_actions)


ROOT_CONTEXT = DispatchContext()


class Tracer:
    """Emits trace records to a ``debug`` callable.

    The callable's return value is ignored; tracing never feeds back into
    dispatch or update control flow.
    """

    def __init__(self, debug: DebugFunc, atom: Any) -> None:
        self._debug = debug
        self._atom = atom

    def report_action(self, action: Action, context: DispatchContext) -> None:
        self._debug(
            TraceRecord(
                kind=TraceKind.ACTION,
                action=action,
                source_actions=context.source_actions,
                atom=self._atom,
            )
        )

    def report_update(self, update: Update, context: DispatchContext, prev_state: Any) -> None:
        self._debug(
            TraceRecord(
                kind=TraceKind.UPDATE,
                action=update,
                source_actions=context.source_actions,
                atom=self._atom,
                prev_state=prev_state,
            )
        )


def format_chain(source_actions: tuple[Action, ...]) -> str:
    """Render an ancestor chain as ``"1:load > 2:loaded"``."""
    return " > ".join(f"{a.seq}:{a.type}" for a in source_actions)


def log_tracer(logger: logging.Logger | None = None, level: int = logging.DEBUG) -> DebugFunc:
    """Return a ``debug`` callable that logs every trace record.

    Payloads and states are passed through :func:`redact_for_log` first.
    Masking is by mapping key only: a bare scalar payload such as
    ``split("login", "hunter2")`` is logged as-is, so carry secrets under a
    sensitive key (``{"password": ...}``).
    """
    log = logger or logging.getLogger("tinyatom.trace")

    def debug(record: TraceRecord) -> None:
        if not log.isEnabledFor(level):
            return
        chain = format_chain(record.source_actions) or "-"
        if isinstance(record.action, Action):
            log.log(
                level,
                "action seq=%d type=%s payload=%s via=%s",
                record.action.seq,
                record.action.type,
                redact_for_log(record.action.payload) if record.action.has_payload else "<none>",
                chain,
            )
        else:
            log.log(
                level,
                "update delta=%s prev=%s state=%s via=%s",
                redact_for_log(record.action.payload),
                redact_for_log(record.prev_state),
                redact_for_log(record.atom.get()) if record.atom is not None else "<none>",
                chain,
            )

    return debug
