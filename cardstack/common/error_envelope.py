"""Error body shared by every cardstack response that is not a success.

    {"error": {"code", "message", "http_status", "resource_kind", "details"}}

Route code calls the helpers below; they raise, so callers never return them.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import HTTPException
from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    code: str
    message: str
    http_status: int
    resource_kind: Optional[str] = None
    details: Dict[str, Any] = Field(default_factory=dict)


class ErrorEnvelope(BaseModel):
    error: ErrorDetail


def build_error_envelope(
    code: str,
    message: str,
    status_code: int = 400,
    resource_kind: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> ErrorEnvelope:
    """Envelope only; exception handlers use this to build a JSON body directly."""
    return ErrorEnvelope(
        error=ErrorDetail(
            code=code,
            message=message,
            http_status=status_code,
            resource_kind=resource_kind,
            details=details or {},
        )
    )


def error_response(
    code: str,
    message: str,
    status_code: int = 400,
    resource_kind: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> HTTPException:
    """Raise an HTTPException whose detail is the dumped envelope.

    ``code`` is dotted and machine-facing ("cards.not_found"); ``message`` is
    what a client shows to a person. ``details`` stays empty unless the caller
    has structured context such as field errors.
    """
    envelope = build_error_envelope(code, message, status_code, resource_kind, details)
    raise HTTPException(status_code=status_code, detail=envelope.model_dump())


def not_found_error(resource_kind: str, message: str) -> HTTPException:
    """Resource missing or not visible to the caller (404)."""
    return error_response(
        code=f"{resource_kind}s.not_found",
        message=message,
        status_code=404,
        resource_kind=resource_kind,
    )


def internal_error(resource_kind: Optional[str] = None) -> HTTPException:
    """Generic 500; never carries internal detail."""
    return error_response(
        code="internal.error",
        message="Server error",
        status_code=500,
        resource_kind=resource_kind,
    )
