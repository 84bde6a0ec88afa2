from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taxdocs.documents.exceptions import (
    AuthError,
    DocumentValidationError,
    NotFoundError,
    ProcessingFailedError,
)
from taxdocs.extraction.exceptions import ExtractionError
from taxdocs.logging.logger import Log

INTERNAL_ERROR_MESSAGE = "Internal server error"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def auth_error_handler(_: Request, exc: AuthError) -> JSONResponse:
    return error_response(status.HTTP_401_UNAUTHORIZED, str(exc) or "Unauthorized")


async def not_found_handler(_: Request, exc: NotFoundError) -> JSONResponse:
    return error_response(status.HTTP_404_NOT_FOUND, str(exc) or "Not found")


async def validation_error_handler(_: Request, exc: DocumentValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    return error_response(status.HTTP_400_BAD_REQUEST, f"Invalid request: {details}")


async def http_error_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def internal_error_handler(_: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, ProcessingFailedError):
        Log.exception(f"Unhandled error: {exc}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain exceptions onto status codes and the {"error": ...} envelope."""
    app.add_exception_handler(AuthError, auth_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(DocumentValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(ProcessingFailedError, internal_error_handler)
    app.add_exception_handler(ExtractionError, internal_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)
