"""Shared request identity and FastAPI context builder."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Optional

from fastapi import Depends, Header

from cardstack.config import runtime_config
from cardstack.identity.auth import get_auth_context
from cardstack.identity.jwt_service import AuthContext


@dataclass
class RequestContext:
    user_id: str
    env: Optional[str] = None
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self) -> None:
        if not self.user_id:
            raise ValueError("user_id is required")
        if not self.request_id:
            raise ValueError("request_id is required")
        self.env = (self.env or runtime_config.get_env()).lower()


def get_request_context(
    auth: AuthContext = Depends(get_auth_context),
    header_request_id: Optional[str] = Header(default=None, alias="X-Request-Id"),
) -> RequestContext:
    return RequestContext(
        user_id=auth.user_id,
        request_id=header_request_id or uuid.uuid4().hex,
    )
