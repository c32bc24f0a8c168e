import logging

import openai
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from road_inspector.utils.response import error_response

logger = logging.getLogger(__name__)


class AppException(Exception):
    message = "Internal server error occurred"
    status_code = 500

    def __init__(self, message: str | None = None, status_code: int | None = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class BadRequest(AppException):
    message = "Invalid request"
    status_code = 400


class AccessDenied(AppException):
    message = "Invalid or missing API key"
    status_code = 403


class ServiceMisconfigured(AppException):
    message = "AI service not configured"
    status_code = 500


class UpstreamInvalid(AppException):
    message = "Invalid request to AI service"
    status_code = 400


class UpstreamAuth(AppException):
    message = "AI service authentication failed"
    status_code = 401


class UpstreamPermission(AppException):
    message = "Permission denied for AI service"
    status_code = 403


class RequestTimeout(AppException):
    message = "Request timed out. Please try again"
    status_code = 408


class UpstreamRateLimited(AppException):
    message = "Rate limit exceeded. Please try again in a moment"
    status_code = 429


class UpstreamUnavailable(AppException):
    message = "AI service temporarily unavailable"
    status_code = 502


class UpstreamOverloaded(AppException):
    message = "AI service is overloaded. Please try again"
    status_code = 503


class NetworkError(AppException):
    message = "Network error. Please check your connection"
    status_code = 503


class EmptyAnalysis(AppException):
    message = "No analysis generated"
    status_code = 500


class UpstreamError(AppException):
    message = "AI service error occurred"
    status_code = 500


# Keyed on the "type" field of the provider's error body.
_ERROR_TYPES: dict[str, type[AppException]] = {
    "invalid_request_error": UpstreamInvalid,
    "authentication_error": UpstreamAuth,
    "permission_error": UpstreamPermission,
    "rate_limit_error": UpstreamRateLimited,
    "api_error": UpstreamUnavailable,
    "overloaded_error": UpstreamOverloaded,
}

# Order matters: APITimeoutError subclasses APIConnectionError.
_ERROR_CLASSES: list[tuple[type[Exception], type[AppException]]] = [
    (openai.APITimeoutError, RequestTimeout),
    (openai.APIConnectionError, NetworkError),
    (openai.BadRequestError, UpstreamInvalid),
    (openai.AuthenticationError, UpstreamAuth),
    (openai.PermissionDeniedError, UpstreamPermission),
    (openai.RateLimitError, UpstreamRateLimited),
]


def map_upstream_error(exc: Exception) -> AppException:
    """Translate an OpenAI SDK failure into the relay's error taxonomy."""
    error_type = getattr(exc, "type", None)
    if isinstance(exc, openai.APIError) and error_type:
        # an unrecognized type is a generic upstream failure, whatever the status
        return _ERROR_TYPES.get(error_type, UpstreamError)()

    for exc_class, app_exc in _ERROR_CLASSES:
        if isinstance(exc, exc_class):
            return app_exc()

    if isinstance(exc, openai.InternalServerError):
        if exc.status_code in (503, 529):
            return UpstreamOverloaded()
        return UpstreamUnavailable()

    if isinstance(exc, openai.OpenAIError):
        return UpstreamError()

    return AppException()


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(exc.message),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected malformed request on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=400,
            content=error_response("Invalid request"),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=error_response("Internal server error occurred"),
        )
