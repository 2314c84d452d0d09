from typing import Any, Dict, List, Optional
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

logger = structlog.get_logger()


class PawPostError(Exception):
    """
    Base class for errors that are reported to the caller.
    Carries an HTTP status, a machine-readable code and a human message.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    code = "bad_request"

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors

    def to_content(self) -> Dict[str, Any]:
        content: Dict[str, Any] = {"code": self.code, "detail": self.message}
        if self.errors is not None:
            content["errors"] = self.errors
        return content


class NotFoundError(PawPostError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class InvalidIdentifierError(PawPostError):
    code = "invalid_id"


class RecordValidationError(PawPostError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "validation_error"

    @classmethod
    def from_pydantic(cls, exc: ValidationError, message: str = "Validation error") -> "RecordValidationError":
        return cls(message, errors=field_errors(exc.errors()))


class UploadRejectedError(PawPostError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    code = "upload_too_large"

    def __init__(self, message: str, status_code: int = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, code: str = "upload_too_large"):
        super().__init__(message)
        self.status_code = status_code
        self.code = code


class CsvImportError(PawPostError):
    code = "csv_parse_error"


_HTTP_CODES = {
    400: "bad_request",
    404: "not_found",
    405: "method_not_allowed",
    413: "upload_too_large",
    415: "unsupported_media_type",
}


def field_errors(raw_errors) -> List[Dict[str, Any]]:
    """
    Flatten pydantic error dicts into {field, message, type} entries.
    The leading "body"/"query"/"path" location is dropped from the field path.
    """
    flattened = []
    for err in raw_errors:
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in ("body", "query", "path", "form"):
            loc = loc[1:]
        flattened.append({
            "field": ".".join(loc),
            "message": err.get("msg", ""),
            "type": err.get("type", ""),
        })
    return flattened


async def global_exception_handler(request: Request, exc: Exception):
    """
    Catch-all for unhandled exceptions.
    Prevents stack trace leakage.
    """
    logger.error("unhandled_exception", error=str(exc), path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"code": "internal_error", "detail": "An unexpected error occurred."},
    )

async def store_exception_handler(request: Request, exc: SQLAlchemyError):
    """
    Persistence failures are logged in full and reported generically.
    """
    logger.error("store_error", error=str(exc), error_type=type(exc).__name__, path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"code": "store_error", "detail": "A storage error occurred."},
    )

async def app_exception_handler(request: Request, exc: PawPostError):
    """
    Domain errors raised by services and routes.
    """
    if exc.status_code >= 500:
        logger.error("request_failed", code=exc.code, error=exc.message, path=request.url.path)
    else:
        logger.info("request_rejected", code=exc.code, error=exc.message, path=request.url.path)
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Standard HTTP exception handler.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": _HTTP_CODES.get(exc.status_code, "http_error"), "detail": exc.detail},
    )

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Pydantic validation error handler.
    """
    errors = field_errors(exc.errors())
    logger.warning("validation_error", errors=errors, path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"code": "validation_error", "detail": "Validation error", "errors": errors},
    )
