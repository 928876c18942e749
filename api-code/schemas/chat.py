from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, StrictStr, field_validator


class ChatRequest(BaseModel):
    message: StrictStr = Field(..., description="User message for the chatbot.")

    @field_validator("message")
    @classmethod
    def _require_visible_text(cls, value: str) -> str:
        # Blank check only; the original text is kept for the echo rule.
        if not value.strip():
            raise ValueError("message must not be blank")
        return value


class ChatResponse(BaseModel):
    response: str = Field(..., description="Chatbot-generated reply.")
    backend_signature: str = Field(
        ...,
        alias="backendSignature",
        description="Display-only proof that the backend produced the reply.",
    )

    model_config = {"populate_by_name": True}


class ChatErrorResponse(BaseModel):
    error: str = Field(..., description="Human-readable failure message.")
    details: Optional[str] = Field(default=None, description="Fault description for diagnostics.")
    backend_signature: Optional[str] = Field(default=None, alias="backendSignature")

    model_config = {"populate_by_name": True}
