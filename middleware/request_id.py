"""Request ID middleware for request correlation and tracing."""
import uuid
from contextvars import ContextVar
from typing import Callable, Optional
from starlette.datastructures import MutableHeaders
from starlette.requests import HTTPConnection, Request
from starlette.websockets import WebSocket
from starlette.types import ASGIApp, Message, Receive, Scope, Send
from config import REQUEST_ID_HEADER, REQUEST_ID_RESPONSE_HEADER
from exceptions import MissingRequestIDError
from utils.sanitization import is_safe_request_id

RequestIDFunc = Callable[[HTTPConnection], str]

# Private scope key; an object rather than a string so nothing else can collide with it
_REQUEST_ID_KEY = object()

# Request ID of the request handled in the current context, for log records
_current_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def uuid4_request_id(request: HTTPConnection) -> str:
    """Generate a random UUID4 request ID."""
    return str(uuid.uuid4())


def header_request_id(header_name: str = REQUEST_ID_HEADER, fallback: RequestIDFunc = uuid4_request_id) -> RequestIDFunc:
    """Create a generator that reuses a well-formed inbound request ID header.

    Malformed or missing values are replaced by ``fallback(request)`` so
    untrusted input never reaches logs or response headers.
    """
    def generate(request: HTTPConnection) -> str:
        inbound = request.headers.get(header_name)
        if is_safe_request_id(inbound):
            return inbound
        return fallback(request)

    return generate


def request_id(request: HTTPConnection) -> str:
    """Return the request ID set by RequestIDMiddleware.

    Usable as a FastAPI dependency: ``Depends(request_id)``.

    Raises:
        MissingRequestIDError: if the middleware did not run for this request.
    """
    try:
        return request.scope[_REQUEST_ID_KEY]
    except KeyError:
        raise MissingRequestIDError(
            "request ID not set; add RequestIDMiddleware before reading it"
        ) from None


def current_request_id() -> Optional[str]:
    """Return the request ID of the request being handled, or None outside a request."""
    return _current_request_id.get()


class RequestIDMiddleware:
    """Assign a request ID to every request and store it in the request scope.

    ``generate_id`` is called once per request. The ID is also echoed on the
    response under ``response_header`` unless that is None or empty.
    """

    def __init__(
        self,
        app: ASGIApp,
        generate_id: RequestIDFunc = uuid4_request_id,
        response_header: Optional[str] = REQUEST_ID_RESPONSE_HEADER,
    ) -> None:
        self.app = app
        self.generate_id = generate_id
        self.response_header = response_header

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        # An outer instance already assigned the ID for this request
        if _REQUEST_ID_KEY not in scope:
            if scope["type"] == "http":
                connection = Request(scope, receive)
            else:
                connection = WebSocket(scope, receive, send)
            scope[_REQUEST_ID_KEY] = self.generate_id(connection)
        req_id = scope[_REQUEST_ID_KEY]

        # Only IDs that are valid header values are echoed; the stored ID is unchanged
        if scope["type"] == "http" and self.response_header and is_safe_request_id(req_id):
            header_name = self.response_header

            async def send_with_request_id(message: Message) -> None:
                if message["type"] == "http.response.start":
                    message.setdefault("headers", [])
                    headers = MutableHeaders(scope=message)
                    headers[header_name] = req_id
                await send(message)
        else:
            send_with_request_id = send

        token = _current_request_id.set(req_id)
        try:
            await self.app(scope, receive, send_with_request_id)
        finally:
            _current_request_id.reset(token)
