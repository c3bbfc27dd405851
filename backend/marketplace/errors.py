import logging
from typing import Any, List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiError(HTTPException):
    """HTTPException that can carry `details` and `issues` in the error body."""

    def __init__(
        self,
        status_code: int,
        error: str,
        details: Optional[str] = None,
        issues: Optional[List[Any]] = None,
        headers: Optional[dict] = None,
    ):
        super().__init__(status_code=status_code, detail=error, headers=headers)
        self.details = details
        self.issues = issues


def not_found(what: str = "Not found") -> ApiError:
    return ApiError(404, what)


def forbidden(what: str = "Forbidden") -> ApiError:
    return ApiError(403, what)


def bad_request(what: str, details: Optional[str] = None) -> ApiError:
    return ApiError(400, what, details=details)


def _issues(exc: RequestValidationError) -> List[dict]:
    # pydantic error ctx can hold exception objects, keep the serializable parts
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    body = {"error": exc.detail if isinstance(exc.detail, str) else str(exc.detail)}
    details = getattr(exc, "details", None)
    issues = getattr(exc, "issues", None)
    if details:
        body["details"] = details
    if issues:
        body["issues"] = issues
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": "Validation failed", "issues": _issues(exc)})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("%s %s failed", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal error"})


def register_error_handlers(app: FastAPI):
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
