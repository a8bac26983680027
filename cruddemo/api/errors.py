from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..errors import ForbiddenFieldError, NotFoundError, RepositoryError, ValidationError

logger = logging.getLogger(__name__)


def install_error_handlers(app: FastAPI) -> None:
    """
    Map cruddemo errors to HTTP responses.

    NotFoundError -> 404, ForbiddenFieldError / ValidationError and malformed
    request bodies -> 400, RepositoryError -> 500.
    """

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ForbiddenFieldError)
    async def forbidden_field(request: Request, exc: ForbiddenFieldError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ValidationError)
    async def invalid(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc), "errors": exc.errors})

    @app.exception_handler(RequestValidationError)
    async def malformed(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ]
        return JSONResponse(status_code=400, content={"detail": "Malformed request", "errors": errors})

    @app.exception_handler(RepositoryError)
    async def store_failure(request: Request, exc: RepositoryError) -> JSONResponse:
        logger.error("Repository failure on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
