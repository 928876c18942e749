from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict

from pydantic import ValidationError

from domain import (
    ChatError,
    ChatInternalError,
    ChatStage,
    ChatValidationError,
    build_signature,
    is_valid_transition,
    utc_now,
)
from schemas import ChatErrorResponse, ChatRequest, ChatResponse


logger = logging.getLogger("echobot.chat")

GREETING_TRIGGERS = ("hello", "hi")
GREETING_REPLY = "Greetings, human! How can I assist you?"
ECHO_PREFIX = "BOT SAYS: "


@dataclass(frozen=True)
class ChatOutcome:
    status_code: int
    body: Dict[str, Any]
    stage: ChatStage


class EchoBotService:
    """Stateless rule-based responder behind POST /api/chat."""

    def __init__(self, bot_name: str, clock: Callable[[], datetime] = utc_now):
        self.bot_name = bot_name
        self._clock = clock

    @staticmethod
    def validate(payload: Any) -> ChatRequest:
        if not isinstance(payload, dict):
            raise ChatValidationError("Request body must be a JSON object.")
        try:
            return ChatRequest.model_validate(payload)
        except ValidationError as exc:
            raise ChatValidationError(str(exc)) from exc

    @staticmethod
    def generate_reply(message: str) -> str:
        # Plain containment, so "this" counts as "hi".
        lowered = message.lower()
        if any(trigger in lowered for trigger in GREETING_TRIGGERS):
            return GREETING_REPLY
        return f"{ECHO_PREFIX}{message.upper()}"

    def sign(self, *, error: bool = False) -> str:
        return build_signature(self.bot_name, error=error, moment=self._clock())

    def respond(self, payload: Any) -> ChatOutcome:
        logger.info("Received chat request")
        logger.debug("Request body: %r", payload)

        stage = ChatStage.RECEIVED
        try:
            request = self.validate(payload)
        except ChatValidationError as exc:
            logger.warning("Validation failed: %s", exc.details)
            return self._failure(exc, _advance(stage, ChatStage.REJECTED))

        try:
            stage = _advance(stage, ChatStage.VALIDATED)
            body = self._process(request)
            stage = _advance(stage, ChatStage.TRANSFORMED)
            stage = _advance(stage, ChatStage.RESPONDED)
        except ChatInternalError as exc:
            logger.exception("Internal error during chat processing: %s", exc.details)
            return self._failure(exc, ChatStage.FAULTED)

        logger.info("Sending response: %s", body)
        return ChatOutcome(200, body, stage)

    def _process(self, request: ChatRequest) -> Dict[str, Any]:
        try:
            reply = self.generate_reply(request.message)
            response = ChatResponse(response=reply, backend_signature=self.sign())
            return response.model_dump(by_alias=True)
        except ChatError:
            raise
        except Exception as exc:  # pylint: disable=broad-except
            raise ChatInternalError(str(exc) or exc.__class__.__name__) from exc

    def _error_signature(self) -> str:
        try:
            return self.sign(error=True)
        except Exception:  # pylint: disable=broad-except
            # Injected clock failed; the wall clock still stamps the error body.
            logger.exception("Clock failed while signing an error response.")
            return build_signature(self.bot_name, error=True, moment=utc_now())

    def _failure(self, exc: ChatError, stage: ChatStage) -> ChatOutcome:
        payload = ChatErrorResponse(
            error=exc.public_message,
            details=exc.details if exc.expose_details else None,
            backend_signature=self._error_signature(),
        )
        return ChatOutcome(
            exc.status_code,
            payload.model_dump(by_alias=True, exclude_none=True),
            stage,
        )


def _advance(current: ChatStage, new: ChatStage) -> ChatStage:
    if not is_valid_transition(current, new):
        raise ChatInternalError(f"Illegal chat stage transition {current.value} -> {new.value}")
    return new
