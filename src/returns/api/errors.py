"""Map returns and notifications errors onto HTTP responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shared.errors import AuthorizationError, NotFoundError, ValidationError


async def _validation_error(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"error": "validation_error", "details": exc.messages})


async def _authorization_error(request: Request, exc: AuthorizationError):
    return JSONResponse(status_code=403, content={"error": "forbidden", "detail": exc.detail})


async def _not_found_error(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"error": "not_found", "detail": str(exc)})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(AuthorizationError, _authorization_error)
    app.add_exception_handler(NotFoundError, _not_found_error)
