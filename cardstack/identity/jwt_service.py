"""HS256 bearer tokens; the ``sub`` claim names the card owner."""
from __future__ import annotations

import base64
import hmac
import json
from dataclasses import dataclass, field
from hashlib import sha256
from typing import Any, Dict, Optional

from cardstack.config import runtime_config

_HEADER = {"alg": "HS256", "typ": "JWT"}


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64url_decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _encode_segment(obj: Dict[str, Any]) -> str:
    return _b64url(json.dumps(obj, separators=(",", ":"), sort_keys=True).encode())


class MissingSigningSecret(RuntimeError):
    """Raised when no signing secret is configured."""


@dataclass
class AuthContext:
    user_id: str
    email: str = ""
    provider: str = "internal"
    claims: Dict[str, Any] = field(default_factory=dict)


class JwtService:
    """Secret comes from the constructor, else AUTH_JWT_SIGNING at call time."""

    def __init__(self, secret: Optional[str] = None) -> None:
        self._secret = secret

    def _sign(self, signing_input: str) -> bytes:
        secret = self._secret or runtime_config.get_jwt_signing_secret()
        if not secret:
            raise MissingSigningSecret("AUTH_JWT_SIGNING is not configured")
        return hmac.new(secret.encode("utf-8"), signing_input.encode("utf-8"), sha256).digest()

    def issue_token(self, claims: Dict[str, object]) -> str:
        signing_input = f"{_encode_segment(_HEADER)}.{_encode_segment(claims)}"
        return f"{signing_input}.{_b64url(self._sign(signing_input))}"

    def decode_token(self, token: str) -> AuthContext:
        parts = token.split(".")
        if len(parts) != 3:
            raise ValueError("invalid token")
        signing_input, sig_b64 = f"{parts[0]}.{parts[1]}", parts[2]
        try:
            signature = _b64url_decode(sig_b64)
            payload = json.loads(_b64url_decode(parts[1]))
        except ValueError:
            raise ValueError("invalid token")
        if not hmac.compare_digest(self._sign(signing_input), signature):
            raise ValueError("invalid signature")
        if not isinstance(payload, dict) or not payload.get("sub"):
            raise ValueError("token has no subject")
        return AuthContext(
            user_id=str(payload["sub"]),
            email=payload.get("email", ""),
            claims=payload,
        )


def default_jwt_service() -> JwtService:
    return JwtService()
