# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .supplement_service import (
    SupplementService,
    build_search_filter,
    quote_filter_value,
)

__all__ = [
    "SupplementService",
    "build_search_filter",
    "quote_filter_value",
]
