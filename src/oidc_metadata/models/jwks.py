"""Models – JSON Web Key Set (RFC 7517)."""
from __future__ import annotations

import dataclasses
from typing import Any, Mapping

from oidc_metadata.models._fields import drop_empty, optional_str, str_tuple

_KEY_MEMBERS = ("kty", "kid", "use", "alg", "n", "e", "crv", "x", "y", "x5t")
_KEY_LISTS = ("key_ops", "x5c")


def _require_pyjwt() -> Any:
    try:
        import jwt  # type: ignore[import-untyped]
        return jwt
    except ImportError as exc:
        raise ImportError(
            "Install 'oidc-metadata-cache[jwt]' (PyJWT[crypto]) to convert key sets"
        ) from exc


@dataclasses.dataclass(frozen=True)
class JsonWebKey:
    """One public key of a provider's key set."""

    kty: str
    kid: str | None = None
    use: str | None = None
    alg: str | None = None
    n: str | None = None
    e: str | None = None
    crv: str | None = None
    x: str | None = None
    y: str | None = None
    x5t: str | None = None
    key_ops: tuple[str, ...] = ()
    x5c: tuple[str, ...] = ()
    extra: dict[str, Any] = dataclasses.field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "JsonWebKey":
        if not isinstance(payload, Mapping):
            raise TypeError("a key must be a JSON object")
        kwargs: dict[str, Any] = {name: optional_str(payload, name) for name in _KEY_MEMBERS}
        if not kwargs["kty"]:
            raise ValueError("key is missing required member 'kty'")
        kwargs.update({name: str_tuple(payload, name) for name in _KEY_LISTS})
        known = set(_KEY_MEMBERS) | set(_KEY_LISTS)
        kwargs["extra"] = {k: v for k, v in payload.items() if k not in known}
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        payload = drop_empty({name: getattr(self, name) for name in _KEY_MEMBERS + _KEY_LISTS})
        payload.update(self.extra)
        return payload


@dataclasses.dataclass(frozen=True)
class KeySet:
    """The provider's published signing keys."""

    keys: tuple[JsonWebKey, ...] = ()

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "KeySet":
        keys = payload.get("keys")
        if not isinstance(keys, list):
            raise TypeError("'keys' must be a list")
        return cls(keys=tuple(JsonWebKey.from_dict(k) for k in keys))

    def to_dict(self) -> dict[str, Any]:
        return {"keys": [k.to_dict() for k in self.keys]}

    def find(self, kid: str | None) -> JsonWebKey | None:
        """Return the key with id *kid*.

        A token without ``kid`` can only be matched when the set holds
        exactly one key.
        """
        if kid is None:
            return self.keys[0] if len(self.keys) == 1 else None
        for key in self.keys:
            if key.kid == kid:
                return key
        return None

    def __len__(self) -> int:
        return len(self.keys)

    def to_pyjwk_set(self) -> Any:
        """Convert to :class:`jwt.PyJWKSet` for use with PyJWT's ``decode``."""
        jwt = _require_pyjwt()
        return jwt.PyJWKSet(self.to_dict()["keys"])


__all__ = ["JsonWebKey", "KeySet"]
