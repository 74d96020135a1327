"""Actions and trace records passed between the atom and its collaborators.

* :class:`Action` is what a named dispatch produces and what the evolution
  function receives.
* :class:`Update` wraps the delta of a direct state update.
* :class:`TraceRecord` is handed to the ``debug`` callable for every
  dispatch and every update.

All models are frozen; payloads and states are carried as-is (no copying,
no validation) because the container treats them as opaque.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TraceKind(StrEnum):
    ACTION = "action"
    UPDATE = "update"


class Action(BaseModel):
    """A named action.

    ``payload`` is optional: when the caller dispatched without one the field
    stays unset, :attr:`has_payload` is ``False`` and
    ``model_dump(exclude_unset=True)`` omits it.  An explicit ``None`` payload
    is a real payload.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    seq: int = Field(..., ge=1, description="Atom-wide, strictly increasing sequence number")
    type: str
    payload: Any = None

    @property
    def has_payload(self) -> bool:
        return "payload" in self.model_fields_set


class Update(BaseModel):
    """The delta of a direct (non-action) state update."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    payload: Any


class TraceRecord(BaseModel):
    """Structured debug event for a dispatch or an update.

    Parameters
    ----------
    kind : TraceKind
        ``"action"`` for named dispatches, ``"update"`` for state merges.
    action : Action or Update
        The dispatched action, or the update wrapping the merged delta.
    source_actions : tuple of Action
        Ancestor actions that led to this event, outermost first.  Empty for
        top-level calls.
    atom : Atom
        The atom that emitted the record.
    prev_state : Any
        State before the merge.  Only set for ``"update"`` records.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    kind: TraceKind
    action: Action | Update
    source_actions: tuple[Action, ...] = ()
    atom: Any = Field(default=None, repr=False)
    prev_state: Any = None

    @property
    def has_prev_state(self) -> bool:
        return "prev_state" in self.model_fields_set
