"""Models – member coercion shared by the discovery and key set decoders."""
from __future__ import annotations

from typing import Any, Mapping


def optional_str(payload: Mapping[str, Any], name: str) -> str | None:
    value = payload.get(name)
    if value is None or isinstance(value, str):
        return value
    raise TypeError(f"'{name}' must be a string, got {type(value).__name__}")


def str_tuple(payload: Mapping[str, Any], name: str) -> tuple[str, ...]:
    value = payload.get(name)
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise TypeError(f"'{name}' must be a list of strings")
    return tuple(value)


def drop_empty(payload: dict[str, Any]) -> dict[str, Any]:
    """Remove ``None`` members and empty sequences, like a null-ignoring serializer."""
    return {
        k: (list(v) if isinstance(v, tuple) else v)
        for k, v in payload.items()
        if v is not None and v != ()
    }
