"""Models – JSON encode/decode of metadata documents."""
from __future__ import annotations

import json
from typing import Any, Mapping, Protocol, TypeVar

from oidc_metadata.kernel.errors import DecodeError

M = TypeVar("M", bound="JsonModel")


class JsonModel(Protocol):
    @classmethod
    def from_dict(cls: type[M], payload: Mapping[str, Any]) -> M: ...

    def to_dict(self) -> dict[str, Any]: ...


def to_json(model: JsonModel, *, indent: bool = False) -> str:
    """Serialise *model*, leaving out unset members."""
    return json.dumps(model.to_dict(), indent=2 if indent else None, ensure_ascii=False)


def from_json(body: bytes | str, model: type[M], *, uri: str | None = None) -> M:
    """Decode *body* into *model*.

    Raises
    ------
    DecodeError
        The body is not JSON, is not a JSON object, or lacks the members
        *model* requires.
    """
    try:
        payload = json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DecodeError(
            f"Response body is not valid JSON: {exc}", uri=uri, model=model.__name__, cause=exc
        ) from exc
    if not isinstance(payload, dict):
        raise DecodeError(
            f"Expected a JSON object, got {type(payload).__name__}",
            uri=uri,
            model=model.__name__,
        )
    try:
        return model.from_dict(payload)
    except (KeyError, TypeError, ValueError) as exc:
        raise DecodeError(
            f"Response body is not a valid {model.__name__}: {exc}",
            uri=uri,
            model=model.__name__,
            cause=exc,
        ) from exc


__all__ = ["JsonModel", "from_json", "to_json"]
