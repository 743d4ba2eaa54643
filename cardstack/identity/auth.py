"""Auth dependency resolving the calling user."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import Header

from cardstack.common.error_envelope import error_response
from cardstack.identity.jwt_service import AuthContext, MissingSigningSecret, default_jwt_service

logger = logging.getLogger(__name__)


def _unauthorized(message: str):
    return error_response(
        code="auth.unauthorized",
        message=message,
        status_code=401,
        resource_kind="token",
    )


def get_auth_context(authorization: Optional[str] = Header(default=None)) -> AuthContext:
    if not authorization or not authorization.lower().startswith("bearer "):
        _unauthorized("missing bearer token")
    token = authorization.split(" ", 1)[1]
    try:
        return default_jwt_service().decode_token(token)
    except MissingSigningSecret:
        logger.error("AUTH_JWT_SIGNING is not set; rejecting all bearer tokens")
        _unauthorized("token verification unavailable")
    except Exception as exc:
        _unauthorized(f"invalid token: {exc}")
