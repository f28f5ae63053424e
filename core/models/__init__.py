# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - supplement.py: Supplement record, budget tiers, filter taxonomy, search schemas
# - chat.py: Placeholder chat response
#
# These models define the "contract" between API and clients.
# =============================================================================

from .supplement import (
    ALLERGENS,
    AVOID_COMMON,
    CERTIFICATIONS,
    FORMS,
    GOALS,
    BackendStatus,
    BudgetTier,
    FiltersResponse,
    SampleResponse,
    SearchResponse,
    Supplement,
)
from .chat import CHAT_PLACEHOLDER_REPLY, ChatResponse, extract_message

__all__ = [
    # Supplements
    "Supplement",
    "BudgetTier",
    "SearchResponse",
    "SampleResponse",
    # Filters
    "FiltersResponse",
    "BackendStatus",
    "GOALS",
    "FORMS",
    "CERTIFICATIONS",
    "AVOID_COMMON",
    "ALLERGENS",
    # Chat
    "ChatResponse",
    "CHAT_PLACEHOLDER_REPLY",
    "extract_message",
]
