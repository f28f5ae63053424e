# =============================================================================
# core/models/chat.py - Chat Schemas
# =============================================================================
# The chat endpoint is a placeholder: it echoes the user's message back with
# a fixed reply. No recommendation logic or language model sits behind it.
# =============================================================================

from typing import Any

from pydantic import BaseModel, Field

CHAT_PLACEHOLDER_REPLY = (
    "Got it. Chat is not connected yet. Next step is wiring this to "
    "search + filters and then the database."
)


class ChatResponse(BaseModel):
    """Response for POST /api/chat."""
    reply: str = Field(default=CHAT_PLACEHOLDER_REPLY)
    received: str = Field(default="", examples=["something for better sleep"])


def extract_message(payload: Any) -> str:
    """
    Pull the `message` field out of a decoded JSON body.

    Anything other than a string (missing field, number, null, non-object
    body) counts as an empty message.
    """
    if not isinstance(payload, dict):
        return ""
    message = payload.get("message")
    return message if isinstance(message, str) else ""
