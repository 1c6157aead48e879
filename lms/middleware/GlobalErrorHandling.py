import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.middleware.base import BaseHTTPMiddleware

from lms.helpers.Exceptions import InvalidInput, LMSError
from lms.helpers.Utilities import Utils

logger = logging.getLogger(__name__)


class GlobalErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Last line of defence: anything a route did not turn into a response becomes a 500 envelope."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except LMSError as e:
            return Utils.create_response(None, False, e.message, e.code, e.status_code)
        except Exception:  # pylint: disable=broad-except
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return Utils.create_response(None, False, "Server error", "INTERNAL_ERROR", 500)


def _format_validation_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{location}: {error.get('msg')}" if location else error.get("msg", "Invalid input")


def add_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(LMSError)
    async def lms_error_handler(request: Request, exc: LMSError):
        return Utils.create_response(None, False, exc.message, exc.code, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = "; ".join(_format_validation_error(error) for error in exc.errors())
        return Utils.create_response(None, False, message or "Validation errors", InvalidInput.code, 400)
