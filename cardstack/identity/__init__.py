"""Caller identity: bearer tokens and the auth dependency."""

from cardstack.identity.jwt_service import AuthContext, JwtService  # noqa: F401
