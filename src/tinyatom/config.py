"""Atom configuration."""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from tinyatom.exceptions import AtomConfigError
from tinyatom.tracing import log_tracer


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


class AtomOptions(BaseModel):
    """Options recognized by :func:`tinyatom.create_atom`.

    Parameters
    ----------
    merge : callable or None
        ``merge(state, delta) -> new_state``.  Replaces the default shallow
        merge.  Must return a new value rather than mutate *state*.
    debug : callable or None
        Receives a :class:`~tinyatom.models.TraceRecord` for every dispatch
        and every update.  Enables provenance tracking of nested dispatches.

    Unknown keys are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    merge: Callable[[Any, Any], Any] | None = None
    debug: Callable[[Any], Any] | None = None

    @classmethod
    def coerce(cls, value: AtomOptions | Mapping[str, Any] | None = None, **overrides: Any) -> AtomOptions:
        """Build options from an instance, a mapping or ``None``.

        Keyword overrides take precedence.  Validation failures are raised
        as :class:`AtomConfigError`.
        """
        if isinstance(value, AtomOptions):
            data: dict[str, Any] = {k: getattr(value, k) for k in value.model_fields_set}
        elif value is None:
            data = {}
        elif isinstance(value, Mapping):
            data = dict(value)
        else:
            raise AtomConfigError(f"options must be a mapping or AtomOptions, got {type(value).__name__}")
        data.update(overrides)
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise AtomConfigError(f"invalid atom options: {exc}") from exc

    @classmethod
    def from_env(cls, **overrides: Any) -> AtomOptions:
        """Create options from environment variables.

        ``TINYATOM_DEBUG`` set to a truthy value (``1``, ``true``, ``yes``,
        ``on``) installs :func:`~tinyatom.tracing.log_tracer` as ``debug``.
        Explicit keyword arguments override environment values.
        """
        kwargs: dict[str, Any] = {}
        if "debug" not in overrides and _env_bool(os.environ.get("TINYATOM_DEBUG"), False):
            kwargs["debug"] = log_tracer()
        kwargs.update(overrides)
        return cls.coerce(kwargs)
