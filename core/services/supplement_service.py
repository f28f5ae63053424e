# =============================================================================
# core/services/supplement_service.py - Supplement Reads
# =============================================================================
# Read-only access to the `supplements` table.
# Separates HTTP concerns from query building.
#
# Each operation issues exactly one datastore call. There are no retries;
# failures are logged and surfaced as DatastoreError.
# =============================================================================

import logging
from typing import Any

from app.exceptions import DatastoreError
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

SUPPLEMENTS_TABLE = "supplements"

SUPPLEMENT_COLUMNS = (
    "id",
    "name",
    "brand",
    "form",
    "goals",
    "certifications",
    "contains",
    "allergens",
    "budget_tier",
    "description",
)

SEARCH_FIELDS = ("name", "brand", "description")

DEFAULT_SEARCH_LIMIT = 25
DEFAULT_SAMPLE_LIMIT = 5


def quote_filter_value(value: str) -> str:
    """
    Quote a value for use inside a PostgREST logic filter.

    Commas, dots and parentheses are filter syntax; a double-quoted value is
    taken literally (with backslash escapes for quotes and backslashes).
    """
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_search_filter(query: str) -> str:
    """
    Build the `or` filter matching `query` as a case-insensitive substring
    of any searchable field.

    Example:
        build_search_filter("zinc")
        -> 'name.ilike."%zinc%",brand.ilike."%zinc%",description.ilike."%zinc%"'
    """
    pattern = quote_filter_value(f"%{query}%")
    return ",".join(f"{field}.ilike.{pattern}" for field in SEARCH_FIELDS)


class SupplementService:
    """
    Service for supplement read operations.

    Provides a clean interface between API routes and the datastore.
    """

    def __init__(self, client: SupabaseClient, search_limit: int = DEFAULT_SEARCH_LIMIT):
        self.client = client
        self.search_limit = search_limit

    def search(self, query: str) -> list[dict[str, Any]]:
        """
        Search supplements by name, brand or description.

        Args:
            query: Free text. Blank means "no filter".

        Returns:
            Up to `search_limit` rows, unranked

        Raises:
            DatastoreError: If the query fails
        """
        query = query.strip()

        def build():
            builder = (
                self.client.table(SUPPLEMENTS_TABLE)
                .select(",".join(SUPPLEMENT_COLUMNS))
                .limit(self.search_limit)
            )
            if query:
                builder = builder.or_(build_search_filter(query))
            return builder

        return self._execute("search", build)

    def sample(self, limit: int = DEFAULT_SAMPLE_LIMIT) -> list[dict[str, Any]]:
        """
        Fetch the first few rows of the table (connectivity check).

        Raises:
            DatastoreError: If the query fails
        """
        return self._execute(
            "sample",
            lambda: self.client.table(SUPPLEMENTS_TABLE).select("*").limit(limit),
        )

    def _execute(self, operation: str, build) -> list[dict[str, Any]]:
        # Client creation happens inside build(), so setup failures land here too
        try:
            response = build().execute()
        except Exception as e:
            logger.error(f"Supplement {operation} failed: {e}")
            raise DatastoreError(operation, str(e)) from e

        return response.data or []
