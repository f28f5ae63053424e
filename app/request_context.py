# =============================================================================
# app/request_context.py - Per-Request Correlation Id
# =============================================================================
# Every request carries an id on request.state.request_id, echoed in the
# X-Request-ID response header and in error bodies so a client report can
# be matched to the server log.
# =============================================================================

import re
from uuid import uuid4

from fastapi import Request

REQUEST_ID_HEADER = "X-Request-ID"

# Inbound ids are reused only if they look like an opaque token
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{8,128}$")


def get_request_id(request: Request) -> str | None:
    """Request id assigned by RequestContextMiddleware, if any."""
    return getattr(request.state, "request_id", None)


def resolve_request_id(request: Request) -> str:
    """Reuse a well-formed inbound X-Request-ID, otherwise mint one."""
    inbound = request.headers.get(REQUEST_ID_HEADER)
    if inbound and _REQUEST_ID_PATTERN.match(inbound):
        return inbound
    return uuid4().hex
