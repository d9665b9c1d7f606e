# inject_kernel/web/errors.py
from __future__ import annotations
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from inject_kernel.di.errors import InjectionError, ResolutionError, type_name

logger = logging.getLogger(__name__)


def error_envelope(code: str, message: str, details=None):
    return {"error": {"code": code, "message": message, "details": details or {}}}


async def resolution_error_handler(request: Request, exc: ResolutionError) -> JSONResponse:
    logger.error("unresolved dependency on %s %s: %s", request.method, request.url.path, exc)
    details = {"type": type_name(exc.type_)}
    if exc.target:
        details["target"] = exc.target
    return JSONResponse(
        error_envelope("DEPENDENCY_NOT_FOUND", str(exc), details), status_code=500
    )


async def injection_error_handler(request: Request, exc: InjectionError) -> JSONResponse:
    logger.error("injection failed on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(error_envelope("INJECTION_ERROR", str(exc)), status_code=500)


def add_error_handlers(app: FastAPI) -> None:
    """Attach injection exception handlers to app."""
    app.add_exception_handler(ResolutionError, resolution_error_handler)
    app.add_exception_handler(InjectionError, injection_error_handler)
