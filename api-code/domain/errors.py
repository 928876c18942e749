from __future__ import annotations

from typing import Optional


VALIDATION_ERROR_MESSAGE = "Message is required and must be a non-empty string."
INTERNAL_ERROR_MESSAGE = "An unexpected error occurred while processing your request."


class ChatError(Exception):
    """Base class for failures surfaced by the chat endpoint."""

    status_code = 500
    public_message = INTERNAL_ERROR_MESSAGE
    expose_details = False

    def __init__(self, details: Optional[str] = None):
        super().__init__(details or self.public_message)
        self.details = details


class ChatValidationError(ChatError):
    status_code = 400
    public_message = VALIDATION_ERROR_MESSAGE


class ChatInternalError(ChatError):
    status_code = 500
    public_message = INTERNAL_ERROR_MESSAGE
    expose_details = True
