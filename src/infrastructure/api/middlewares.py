from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware

from src.infrastructure.config import get_settings

logger = logging.getLogger(__name__)


def add_default_middlewares(app: FastAPI) -> None:
    # CORS configuration
    # development/staging: localhost frontends, anything else: wildcard
    settings = get_settings()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def add_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.error("HTTP %s: %s | %s %s", exc.status_code, exc.detail, request.method, request.url)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = [f"{e['loc'][-1] if e['loc'] else 'body'}: {e['msg']}" for e in exc.errors()]
        logger.warning("Validation error: %s | %s %s", errors, request.method, request.url)
        return JSONResponse(
            status_code=422,
            content={"error": "Validation Error", "detail": errors},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error: %s | %s %s", exc, request.method, request.url)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal Server Error"},
        )
