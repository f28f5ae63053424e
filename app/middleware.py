# =============================================================================
# app/middleware.py - HTTP Middleware
# =============================================================================
# - RequestContextMiddleware: request id + light security headers
# - OriginGateMiddleware: applies app.cors decisions before routing
#
# Registered in app/main.py. RequestContextMiddleware is the outer layer so
# CORS rejections carry a request id too.
#
# Both layers turn an exception escaping the routes into the generic 500
# themselves, so error responses still get CORS and security headers.
# =============================================================================

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from app.cors import CorsDecision, OriginRegistry, evaluate_request
from app.exceptions import unhandled_exception_handler
from app.request_context import REQUEST_ID_HEADER, resolve_request_id

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "no-referrer",
}


async def _call_next_or_500(
    request: Request,
    call_next: RequestResponseEndpoint,
) -> Response:
    try:
        return await call_next(request)
    except Exception as exc:
        return await unhandled_exception_handler(request, exc)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag every request with a correlation id and add security headers."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.request_id = resolve_request_id(request)

        response = await _call_next_or_500(request, call_next)

        response.headers[REQUEST_ID_HEADER] = request.state.request_id
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class OriginGateMiddleware(BaseHTTPMiddleware):
    """
    Origin-validating CORS gate.

    Terminal decisions (preflights, rejections) are answered here and never
    reach a route handler. Allowed browser requests continue to the
    dispatcher and get the CORS headers attached to whatever it returns,
    including error responses.
    """

    def __init__(self, app: ASGIApp, registry: OriginRegistry):
        super().__init__(app)
        self.registry = registry

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        origin = request.headers.get("origin")
        decision = evaluate_request(request.method, origin, self.registry)

        if decision.is_rejected:
            # Expected for stray browser origins; not an error
            logger.info(f"Rejected {request.method} {request.url.path} from origin {origin!r}")

        if decision.is_terminal:
            response = _terminal_response(decision)
        else:
            response = await _call_next_or_500(request, call_next)

        _attach_headers(response, decision.headers)
        return response


def _terminal_response(decision: CorsDecision) -> Response:
    if decision.body is not None:
        return JSONResponse(status_code=decision.status_code, content=decision.body)
    return Response(status_code=decision.status_code)


def _attach_headers(response: Response, headers: dict[str, str]) -> None:
    for name, value in headers.items():
        if name == "Vary":
            response.headers.add_vary_header(value)
        else:
            response.headers[name] = value
