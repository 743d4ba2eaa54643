"""App factory for the cards HTTP service."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cardstack.cards.routes import router as cards_router
from cardstack.common.error_envelope import build_error_envelope
from cardstack.common.health import router as health_router
from cardstack.config import runtime_config

logger = logging.getLogger(__name__)

# --- Error Handling ---

async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Normalize existing envelopes if possible
    detail = exc.detail
    if isinstance(detail, dict) and "error" in detail:
        return JSONResponse(content=detail, status_code=exc.status_code, headers=exc.headers)

    envelope = build_error_envelope(
        code="http.exception",
        message=str(detail) if detail else "HTTP exception",
        status_code=exc.status_code,
    )
    return JSONResponse(content=envelope.model_dump(), status_code=exc.status_code, headers=exc.headers)


async def _validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    envelope = build_error_envelope(
        code="validation.error",
        message="Validation failed",
        status_code=400,
        details={"errors": errors},
    )
    return JSONResponse(content=envelope.model_dump(), status_code=400)


async def _generic_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    envelope = build_error_envelope(
        code="internal.error",
        message="Server error",
        status_code=500,
    )
    return JSONResponse(content=envelope.model_dump(), status_code=500)


def register_error_handlers(target_app: FastAPI) -> None:
    target_app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    target_app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    target_app.add_exception_handler(Exception, _generic_exception_handler)


# --- App Factory ---

def create_app() -> FastAPI:
    app = FastAPI(title="Cardstack Cards API", version="0.1.0")
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(cards_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=runtime_config.get_log_level())
    logger.info("Starting cards service (env=%s, backend=%s)", runtime_config.get_env(), runtime_config.get_cards_backend())
    uvicorn.run(app, host=runtime_config.get_bind_host(), port=runtime_config.get_bind_port())
