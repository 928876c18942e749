from .chat_service import ChatOutcome, EchoBotService

__all__ = ["ChatOutcome", "EchoBotService"]
