from .chat import ChatErrorResponse, ChatRequest, ChatResponse

__all__ = [
    "ChatErrorResponse",
    "ChatRequest",
    "ChatResponse",
]
