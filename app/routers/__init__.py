# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health and version endpoints
# - supplements.py: Filters, search and datastore check endpoints
# - chat.py: Placeholder chat endpoint
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import supplements
from . import chat

__all__ = [
    "health",
    "supplements",
    "chat",
]
