# =============================================================================
# app/routers/chat.py - Chat Endpoint
# =============================================================================
# Placeholder chat: echoes the received message with a fixed reply.
#
# The body is read from the Request rather than a Pydantic model so that a
# missing or non-string `message` (or a non-JSON body) yields an empty
# message instead of a validation error.
# =============================================================================

from typing import Any

from fastapi import APIRouter, Request

from app.dependencies import SettingsDep
from app.exceptions import InvalidJSONBodyError, PayloadTooLargeError
from core.models.chat import ChatResponse, extract_message

router = APIRouter()


async def read_json_body(request: Request, max_bytes: int) -> Any:
    """
    Decode a JSON request body.

    Returns {} when the body is empty or not declared as JSON.

    Raises:
        PayloadTooLargeError: If the body exceeds max_bytes
        InvalidJSONBodyError: If a JSON body cannot be decoded
    """
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > max_bytes:
        raise PayloadTooLargeError(int(declared), max_bytes)

    content_type = request.headers.get("content-type", "")
    if "json" not in content_type.split(";")[0].lower():
        return {}

    body = await request.body()
    if len(body) > max_bytes:
        raise PayloadTooLargeError(len(body), max_bytes)
    if not body.strip():
        return {}

    try:
        return await request.json()
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise InvalidJSONBodyError(str(e))


@router.post("/chat", response_model=ChatResponse)
async def chat(request: Request, settings: SettingsDep):
    """
    Chat endpoint (not connected to recommendations yet).

    Example:
        POST /api/chat {"message": "hello"}
        -> {"reply": "Got it. ...", "received": "hello"}
    """
    payload = await read_json_body(request, settings.MAX_BODY_BYTES)
    return ChatResponse(received=extract_message(payload))
