"""AWS Lambda / Netlify-style entry point for the chat endpoint.

Translates an API Gateway proxy event into ``EchoBotService.respond`` and the
outcome back into a proxy result. No chat logic lives here.
"""
from __future__ import annotations

import base64
import binascii
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Mapping, Optional


PROJECT_ROOT = Path(__file__).resolve().parent
API_CODE_PATH = PROJECT_ROOT / "api-code"
if str(API_CODE_PATH) not in sys.path:
    sys.path.insert(0, str(API_CODE_PATH))

from services import EchoBotService  # noqa: E402
from settings import get_settings  # noqa: E402


logger = logging.getLogger("echobot.lambda")

CHAT_PATH_SUFFIX = "/chat"
RESPONSE_HEADERS = {"Content-Type": "application/json"}

_service: Optional[EchoBotService] = None


def get_service() -> EchoBotService:
    global _service  # pylint: disable=global-statement
    if _service is None:
        settings = get_settings()
        logging.basicConfig(level=settings.log_level)
        _service = EchoBotService(bot_name=settings.bot_name)
    return _service


def handler(event: Mapping[str, Any], context: Any = None) -> Dict[str, Any]:
    method = str(event.get("httpMethod") or _request_context_method(event) or "").upper()
    path = str(event.get("path") or event.get("rawPath") or "").rstrip("/")

    if method != "POST" or not path.endswith(CHAT_PATH_SUFFIX):
        logger.info("No route for %s %s", method or "?", path or "/")
        return _proxy_result(404, {"error": "Not found."})

    outcome = get_service().respond(_decode_body(event))
    return _proxy_result(outcome.status_code, outcome.body)


def _request_context_method(event: Mapping[str, Any]) -> Optional[str]:
    # HTTP API (payload v2) puts the method under requestContext.http.
    http = (event.get("requestContext") or {}).get("http") or {}
    return http.get("method")


def _decode_body(event: Mapping[str, Any]) -> Any:
    headers = {str(k).lower(): str(v) for k, v in (event.get("headers") or {}).items()}
    if "json" not in headers.get("content-type", "").lower():
        return {}

    raw = event.get("body")
    if not raw:
        return {}
    if event.get("isBase64Encoded"):
        try:
            raw = base64.b64decode(raw)
        except (binascii.Error, ValueError):
            return {}
    try:
        return json.loads(raw)
    except (ValueError, RecursionError):
        return {}


def _proxy_result(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": dict(RESPONSE_HEADERS),
        "body": json.dumps(body),
    }
