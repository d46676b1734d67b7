"""Models – OpenID Connect discovery document."""
from __future__ import annotations

import dataclasses
from typing import Any, Mapping

from oidc_metadata.models._fields import drop_empty, optional_str, str_tuple

_ENDPOINTS = (
    "issuer",
    "authorization_endpoint",
    "token_endpoint",
    "userinfo_endpoint",
    "end_session_endpoint",
    "jwks_uri",
    "registration_endpoint",
    "revocation_endpoint",
    "introspection_endpoint",
)
_CAPABILITIES = (
    "scopes_supported",
    "response_types_supported",
    "grant_types_supported",
    "subject_types_supported",
    "id_token_signing_alg_values_supported",
    "token_endpoint_auth_methods_supported",
    "claims_supported",
    "code_challenge_methods_supported",
)


@dataclasses.dataclass(frozen=True)
class DiscoveryDocument:
    """Provider metadata served at ``/.well-known/openid-configuration``.

    Members are named as on the wire. Unknown members are kept in ``extra`` so
    that :meth:`to_dict` reproduces the provider's document.
    """

    issuer: str | None = None
    authorization_endpoint: str | None = None
    token_endpoint: str | None = None
    userinfo_endpoint: str | None = None
    end_session_endpoint: str | None = None
    jwks_uri: str | None = None
    registration_endpoint: str | None = None
    revocation_endpoint: str | None = None
    introspection_endpoint: str | None = None
    scopes_supported: tuple[str, ...] = ()
    response_types_supported: tuple[str, ...] = ()
    grant_types_supported: tuple[str, ...] = ()
    subject_types_supported: tuple[str, ...] = ()
    id_token_signing_alg_values_supported: tuple[str, ...] = ()
    token_endpoint_auth_methods_supported: tuple[str, ...] = ()
    claims_supported: tuple[str, ...] = ()
    code_challenge_methods_supported: tuple[str, ...] = ()
    extra: dict[str, Any] = dataclasses.field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "DiscoveryDocument":
        kwargs: dict[str, Any] = {name: optional_str(payload, name) for name in _ENDPOINTS}
        kwargs.update({name: str_tuple(payload, name) for name in _CAPABILITIES})
        known = set(_ENDPOINTS) | set(_CAPABILITIES)
        kwargs["extra"] = {k: v for k, v in payload.items() if k not in known}
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        payload = {name: getattr(self, name) for name in _ENDPOINTS + _CAPABILITIES}
        payload = drop_empty(payload)
        payload.update(self.extra)
        return payload


__all__ = ["DiscoveryDocument"]
