"""Helpers for safe debug logging of state and payloads.

Atom state frequently holds credentials or large blobs.  This module
provides a small utility to mask sensitive fields and shorten long values
before they are written to DEBUG logs by :func:`tinyatom.tracing.log_tracer`.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "passwd",
        "secret",
        "token",
        "accesstoken",
        "refreshtoken",
        "apikey",
        "authorization",
        "cookie",
    }
)


def _normalize_key(key: Any) -> str:
    return str(key).lower().replace("_", "").replace("-", "")


def redact_for_log(
    value: Any,
    *,
    max_string: int = 200,
    max_items: int = 50,
    sensitive_keys: frozenset[str] = SENSITIVE_KEYS,
    _depth: int = 0,
) -> Any:
    """Return a redacted copy of *value* suitable for debug logs."""
    if _depth > 20:
        return "<max-depth>"

    if value is None or isinstance(value, (bool, int, float)):
        return value

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"

    kwargs: dict[str, Any] = {
        "max_string": max_string,
        "max_items": max_items,
        "sensitive_keys": sensitive_keys,
        "_depth": _depth + 1,
    }

    if isinstance(value, BaseModel):
        return redact_for_log(value.model_dump(exclude_unset=True), **{**kwargs, "_depth": _depth})

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for index, (k, v) in enumerate(value.items()):
            if index >= max_items:
                redacted["…"] = f"<{len(value) - max_items} more>"
                break
            key = str(k)
            if _normalize_key(key) in sensitive_keys:
                redacted[key] = "<redacted>"
            else:
                redacted[key] = redact_for_log(v, **kwargs)
        return redacted

    if isinstance(value, Sequence):
        items = [redact_for_log(v, **kwargs) for v in list(value)[:max_items]]
        if len(value) > max_items:
            items.append(f"<{len(value) - max_items} more>")
        return items

    # Fallback: represent unknown objects without dumping internals.
    return repr(value)
