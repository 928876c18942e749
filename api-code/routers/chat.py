from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from schemas import ChatErrorResponse, ChatResponse
from services import EchoBotService


class AsciiJSONResponse(JSONResponse):
    """JSON response escaped to ASCII so lone surrogates in echoed text still encode."""

    def render(self, content: Any) -> bytes:
        return json.dumps(content, ensure_ascii=True, separators=(",", ":")).encode("ascii")


def build_chat_router(chat_service: EchoBotService) -> APIRouter:
    """Create the chat router wired to the provided chat service."""
    router = APIRouter(prefix="/api", tags=["chat"])

    @router.post(
        "/chat",
        response_model=ChatResponse,
        response_class=AsciiJSONResponse,
        responses={400: {"model": ChatErrorResponse}, 500: {"model": ChatErrorResponse}},
        summary="Send a message to the bot and receive a signed reply.",
    )
    async def chat_endpoint(request: Request) -> AsciiJSONResponse:
        payload = await read_json_body(request)
        outcome = chat_service.respond(payload)
        return AsciiJSONResponse(status_code=outcome.status_code, content=outcome.body)

    return router


def decode_json(raw: bytes | str) -> Any:
    """Parse a JSON document, treating anything unparseable as an empty object."""
    try:
        return json.loads(raw)
    except (ValueError, RecursionError):
        return {}


async def read_json_body(request: Request) -> Any:
    """Decode a JSON body, treating non-JSON requests as an empty object."""
    content_type = request.headers.get("content-type", "")
    if "json" not in content_type.lower():
        return {}
    raw = await request.body()
    if not raw:
        return {}
    return decode_json(raw)
