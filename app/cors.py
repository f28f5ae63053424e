# =============================================================================
# app/cors.py - Origin Registry & CORS Decisions
# =============================================================================
# Decides, per request, whether a browser caller may receive a response.
#
# The decision is a pure function of (method, Origin header, registry) so it
# can be tested without an HTTP stack. OriginGateMiddleware in
# app/middleware.py applies the decision to live requests.
#
# Allowed responses echo the exact origin instead of "*": browsers refuse
# credentialed responses with a wildcard allow-origin.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

ALLOWED_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS")
ALLOWED_HEADERS = ("Content-Type", "Authorization")

ORIGIN_NOT_ALLOWED = "CORS: Origin not allowed"


# =============================================================================
# Origin Registry
# =============================================================================

@dataclass(frozen=True)
class OriginRegistry:
    """
    Immutable allow-list of browser origins.

    Membership is an exact, case-sensitive string match on
    scheme + host + port. No wildcards, no suffix matching.
    """

    origins: tuple[str, ...] = ()

    @classmethod
    def from_string(cls, raw: str | None, separator: str = ",") -> OriginRegistry:
        """
        Build a registry from a delimited configuration string.

        Example:
            OriginRegistry.from_string("http://localhost:3000, https://app.vercel.app")
        """
        if not raw:
            return cls()
        entries = (part.strip() for part in raw.split(separator))
        return cls(origins=tuple(entry for entry in entries if entry))

    def is_allowed(self, origin: str | None) -> bool:
        """True iff the origin is exactly present in the allow-list."""
        if not origin:
            return False
        return origin in self.origins

    def describe(self) -> str:
        """Human-readable listing for startup logs."""
        return ", ".join(self.origins) or "(none)"


# =============================================================================
# Gate Decisions
# =============================================================================

@dataclass(frozen=True)
class CorsDecision:
    """
    Outcome of evaluating one request.

    - status_code: terminal status to respond with, or None to continue
      to the route dispatcher
    - headers: headers to attach to whatever response is sent
    - body: JSON body for terminal responses (None means empty body)
    """

    status_code: int | None = None
    headers: dict[str, str] = field(default_factory=dict)
    body: dict[str, Any] | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status_code is not None

    @property
    def is_rejected(self) -> bool:
        return self.status_code == 403


def cors_headers(origin: str) -> dict[str, str]:
    """Headers granting a credentialed cross-origin response to `origin`."""
    return {
        "Access-Control-Allow-Origin": origin,
        "Vary": "Origin",
        "Access-Control-Allow-Credentials": "true",
        "Access-Control-Allow-Methods": ",".join(ALLOWED_METHODS),
        "Access-Control-Allow-Headers": ", ".join(ALLOWED_HEADERS),
    }


def evaluate_request(
    method: str,
    origin: str | None,
    registry: OriginRegistry,
) -> CorsDecision:
    """
    Classify a request by method, Origin header and allow-list membership.

    | Method  | Origin  | Allowed | Decision                        |
    |---------|---------|---------|---------------------------------|
    | OPTIONS | absent  |    -    | 204, stop                       |
    | OPTIONS | present |   yes   | 204 + CORS headers, stop        |
    | OPTIONS | present |   no    | 403, stop                       |
    | other   | absent  |    -    | continue untouched              |
    | other   | present |   yes   | continue + CORS headers         |
    | other   | present |   no    | 403 JSON error, stop            |

    An empty Origin header is treated as absent.
    """
    is_preflight = method.upper() == "OPTIONS"

    if not origin:
        # Non-browser caller (curl, server-to-server)
        return CorsDecision(status_code=204) if is_preflight else CorsDecision()

    if registry.is_allowed(origin):
        headers = cors_headers(origin)
        if is_preflight:
            return CorsDecision(status_code=204, headers=headers)
        return CorsDecision(headers=headers)

    if is_preflight:
        return CorsDecision(status_code=403)
    return CorsDecision(status_code=403, body={"error": ORIGIN_NOT_ALLOWED})
