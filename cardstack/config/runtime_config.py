"""Runtime configuration helpers for cardstack."""
from __future__ import annotations

import os
from typing import Optional

DEFAULT_CARDS_COLLECTION = "cards"


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(name, default)


def get_env() -> str:
    env_value = _get_env("ENV") or _get_env("APP_ENV")
    return env_value.lower() if env_value else "dev"


def get_cards_backend() -> str:
    return (_get_env("CARDS_BACKEND") or "memory").lower()


def get_firestore_project() -> Optional[str]:
    return _get_env("GCP_PROJECT_ID") or _get_env("GCP_PROJECT")


def get_cards_collection() -> str:
    return _get_env("CARDS_COLLECTION") or DEFAULT_CARDS_COLLECTION


def get_jwt_signing_secret() -> Optional[str]:
    return _get_env("AUTH_JWT_SIGNING")


def get_log_level() -> str:
    return (_get_env("LOG_LEVEL") or "INFO").upper()


def get_bind_host() -> str:
    return _get_env("HOST") or "0.0.0.0"


def get_bind_port() -> int:
    raw = _get_env("PORT") or "8000"
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"PORT must be an integer, got: {raw}")
