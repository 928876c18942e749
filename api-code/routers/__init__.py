from .chat import build_chat_router

__all__ = ["build_chat_router"]
