"""Problem detail (RFC 7807) response helpers."""
import json
from typing import Any, Mapping, Optional
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel
from starlette.responses import JSONResponse
from starlette.types import Send
from config import PROBLEM_CONTENT_TYPE
from exceptions import SerializationError


def encode_problem(problem: Any) -> bytes:
    """Serialize a problem value to compact UTF-8 JSON.

    Pydantic models (including Problem and its subclasses) are dumped by alias,
    so empty base members are dropped and extension members stay flattened.
    Anything else goes through FastAPI's jsonable_encoder.

    Raises:
        SerializationError: if the value cannot be encoded.
    """
    try:
        if isinstance(problem, BaseModel):
            content = problem.model_dump(mode="json", by_alias=True)
        else:
            content = jsonable_encoder(problem, by_alias=True)
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=None,
            separators=(",", ":"),
        ).encode("utf-8")
    except (TypeError, ValueError, RecursionError) as exc:
        raise SerializationError(f"failed to encode problem: {exc}") from exc


def _problem_headers(headers: Optional[Mapping[str, str]]) -> list:
    raw_headers = [
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in (headers or {}).items()
        if name.lower() != "content-type"
    ]
    raw_headers.append((b"content-type", PROBLEM_CONTENT_TYPE.encode("latin-1")))
    return raw_headers


async def send_problem(
    send: Send,
    status_code: int,
    problem: Any,
    headers: Optional[Mapping[str, str]] = None,
) -> None:
    """Write a problem json response to an ASGI send channel.

    Content-Type is always application/problem+json, replacing any content type
    in ``headers``. The status line and headers go out before the body is
    encoded, so a failure may leave a partially written response behind.

    Raises:
        SerializationError: if the problem cannot be encoded or a write fails.
    """
    try:
        await send({
            "type": "http.response.start",
            "status": status_code,
            "headers": _problem_headers(headers),
        })
        body = encode_problem(problem)
        await send({"type": "http.response.body", "body": body, "more_body": False})
    except SerializationError:
        raise
    except Exception as exc:
        raise SerializationError(f"failed to write problem response: {exc}") from exc


class ProblemResponse(JSONResponse):
    """JSONResponse rendering a problem document as application/problem+json."""
    media_type = PROBLEM_CONTENT_TYPE

    def __init__(self, content: Any, status_code: int = 200, headers: Optional[Mapping[str, str]] = None, background=None):
        if headers:
            headers = {name: value for name, value in headers.items() if name.lower() != "content-type"}
        super().__init__(content, status_code=status_code, headers=headers, background=background)

    def render(self, content: Any) -> bytes:
        return encode_problem(content)
