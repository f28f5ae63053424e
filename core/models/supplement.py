# =============================================================================
# core/models/supplement.py - Supplement Record & Filter Taxonomy
# =============================================================================
# These models describe the rows of the `supplements` table as the API
# returns them, plus the fixed filter vocabulary shown on the Search page.
#
# The backend only reads supplements; rows are created and maintained by an
# external process.
# =============================================================================

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BudgetTier(str, Enum):
    """
    Ordinal price band of a product.

    - low: "$"
    - medium: "$$"
    - high: "$$$"
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def label(self) -> str:
        return "$" * (list(BudgetTier).index(self) + 1)


class Supplement(BaseModel):
    """
    A single supplement product as stored in the `supplements` table.

    The table is maintained outside this service, so rows are coerced rather
    than rejected: NULL tag arrays become [], a scalar tag becomes a
    one-element list, and non-text values in text columns are stringified.
    `budget_tier` is kept as free text.
    """

    model_config = ConfigDict(extra="ignore")

    id: int | str | None = None
    name: str | None = None
    brand: str | None = None
    form: str | None = None
    goals: list[Any] = Field(default_factory=list)
    certifications: list[Any] = Field(default_factory=list)
    contains: list[Any] = Field(default_factory=list)
    allergens: list[Any] = Field(default_factory=list)
    budget_tier: str | None = None
    description: str | None = None

    @field_validator("goals", "certifications", "contains", "allergens", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> list[Any]:
        if value is None:
            return []
        if isinstance(value, (list, tuple, set)):
            return list(value)
        return [value]

    @field_validator("name", "brand", "form", "budget_tier", "description", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        if value is None or isinstance(value, str):
            return value
        return str(value)


# =============================================================================
# Filter Taxonomy
# =============================================================================
# Static vocabulary the frontend renders as filter chips.

GOALS = ["Energy", "Sleep", "Focus", "Stress", "Gut", "Recovery"]
FORMS = ["Capsule", "Tablet", "Powder", "Gummy", "Liquid"]
CERTIFICATIONS = ["Third-party tested", "NSF", "USP", "Informed Choice"]
AVOID_COMMON = ["Melatonin", "Caffeine", "Artificial colors", "Gelatin"]
ALLERGENS = ["Dairy", "Gluten", "Soy", "Egg", "Tree nuts", "Peanuts"]


class BackendStatus(BaseModel):
    connected: bool = True


class FiltersResponse(BaseModel):
    """Response for GET /api/filters."""
    goals: list[str] = Field(default_factory=lambda: list(GOALS))
    forms: list[str] = Field(default_factory=lambda: list(FORMS))
    budgets: list[str] = Field(default_factory=lambda: [tier.label for tier in BudgetTier])
    certifications: list[str] = Field(default_factory=lambda: list(CERTIFICATIONS))
    avoidCommon: list[str] = Field(default_factory=lambda: list(AVOID_COMMON))
    allergens: list[str] = Field(default_factory=lambda: list(ALLERGENS))
    backend: BackendStatus = Field(default_factory=BackendStatus)


# =============================================================================
# Search Schemas
# =============================================================================

class SearchResponse(BaseModel):
    """Response for GET /api/search."""
    query: str = Field(..., examples=["magnesium"])
    results: list[Supplement]


class SampleResponse(BaseModel):
    """Response for GET /api/test-db: raw rows, unvalidated."""
    data: list[dict[str, Any]]
