"""Error types and exception handlers rendering problem detail responses."""
import logging
from http import HTTPStatus
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
from config import DEBUG, PROBLEM_TYPE_BASE_URL

logger = logging.getLogger(__name__)


class SerializationError(Exception):
    """Raised when a problem value cannot be encoded or written to the response."""


class MissingRequestIDError(RuntimeError):
    """Raised when the request ID is read before RequestIDMiddleware has run.

    This signals a wiring mistake (middleware missing or ordered after the
    caller), not a runtime condition to recover from.
    """


# Problem type slugs, appended to PROBLEM_TYPE_BASE_URL when it is configured
ERROR_TYPES = {
    400: "bad-request",
    401: "unauthorized",
    403: "forbidden",
    404: "not-found",
    405: "method-not-allowed",
    409: "conflict",
    413: "payload-too-large",
    415: "unsupported-media-type",
    422: "validation-error",
    429: "rate-limit-exceeded",
    500: "internal-server-error",
    503: "service-unavailable",
    504: "gateway-timeout"
}


def problem_type_for(status_code: int):
    """Return the problem type URI for a status code, or None for about:blank."""
    slug = ERROR_TYPES.get(status_code)
    if not PROBLEM_TYPE_BASE_URL or not slug:
        return None
    return f"{PROBLEM_TYPE_BASE_URL}/{slug}"


def status_title(status_code: int) -> str:
    """Return the standard reason phrase for a status code."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def _request_id_extension(request: Request) -> dict:
    # Handlers also run for apps without the request ID middleware
    from middleware.request_id import request_id
    try:
        return {"request_id": request_id(request)}
    except MissingRequestIDError:
        return {}


def register_exception_handlers(app):
    """Register exception handlers that answer with application/problem+json."""
    from models import InvalidParam, Problem, ValidationProblem
    from utils.problem import ProblemResponse

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Render request validation errors as a 422 validation problem."""
        invalid_params = [
            InvalidParam(
                name=".".join(str(loc) for loc in error["loc"]),
                reason=error["msg"],
            )
            for error in exc.errors()
        ]
        logger.info(f"❌ VALIDATION ERROR: {len(invalid_params)} invalid parameter(s) | Path={request.url.path}")

        problem = ValidationProblem(
            type=problem_type_for(422),
            title="Your request parameters didn't validate.",
            status=422,
            instance=request.url.path,
            invalid_params=invalid_params,
            **_request_id_extension(request)
        )
        return ProblemResponse(problem, status_code=422)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Render HTTPException as a problem document, keeping its headers."""
        title = status_title(exc.status_code)
        fields = {
            "type": problem_type_for(exc.status_code),
            "title": title,
            "status": exc.status_code,
            "detail": None,
            "instance": request.url.path,
        }
        if isinstance(exc.detail, dict):
            # Structured detail supplies problem members and extensions
            fields.update(exc.detail)
            fields["status"] = exc.status_code
            for name in ("type", "title", "detail", "instance"):
                if fields[name] is not None:
                    fields[name] = str(fields[name])
        elif exc.detail and exc.detail != title:
            # Starlette fills an empty detail with the reason phrase
            fields["detail"] = str(exc.detail)
        fields.update(_request_id_extension(request))

        return ProblemResponse(Problem(**fields), status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Render unhandled exceptions as a generic 500 problem."""
        extensions = _request_id_extension(request)

        # Log full error details server-side
        logger.error(
            f"❌ UNHANDLED EXCEPTION: {type(exc).__name__}: {str(exc)} | Path={request.url.path} | Request-ID={extensions.get('request_id')}",
            exc_info=True
        )

        problem = Problem(
            type=problem_type_for(500),
            title=status_title(500),
            status=500,
            detail=str(exc) if DEBUG else "An internal server error occurred",
            instance=request.url.path,
            **extensions
        )
        return ProblemResponse(problem, status_code=500)
