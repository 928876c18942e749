from .chat_stages import ChatStage, is_valid_transition
from .errors import (
    INTERNAL_ERROR_MESSAGE,
    VALIDATION_ERROR_MESSAGE,
    ChatError,
    ChatInternalError,
    ChatValidationError,
)
from .signature import build_signature, format_timestamp, parse_signature_timestamp, utc_now

__all__ = [
    "ChatStage",
    "is_valid_transition",
    "INTERNAL_ERROR_MESSAGE",
    "VALIDATION_ERROR_MESSAGE",
    "ChatError",
    "ChatInternalError",
    "ChatValidationError",
    "build_signature",
    "format_timestamp",
    "parse_signature_timestamp",
    "utc_now",
]
