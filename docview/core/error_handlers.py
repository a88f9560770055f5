# File: /docview/core/error_handlers.py | Version: 1.1 | Title: Structured Error Handlers
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from docview.core.errors import DocViewError

log = logging.getLogger(__name__)

_CODE_MAP = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    409: "CONFLICT",
    422: "UNPROCESSABLE_ENTITY",
    500: "INTERNAL_SERVER_ERROR",
}


def _err(code: int, message: str, kind: str | None = None, details=None):
    body = {"code": _CODE_MAP.get(code, "ERROR"), "message": message}
    if kind:
        body["kind"] = kind
    if details:
        body["details"] = details
    return {"error": body}


def register_engine_handlers(app: FastAPI) -> None:
    @app.exception_handler(DocViewError)
    async def _engine_exc(_req: Request, exc: DocViewError):
        log.info("%s: %s", exc.kind, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content=_err(exc.status_code, exc.message, exc.kind, exc.details),
        )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def _http_exc(_req: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_err(exc.status_code, str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_exc(_req: Request, exc: RequestValidationError):
        return JSONResponse(status_code=422, content=_err(422, "Validation error"))

    @app.exception_handler(Exception)
    async def _unhandled(_req: Request, exc: Exception):
        # Avoid leaking internals
        log.exception("Unhandled error")
        return JSONResponse(status_code=500, content=_err(500, "Internal server error"))
