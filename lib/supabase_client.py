# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module wraps the supabase-py client used for all datastore reads.
#
# The underlying client is created on first use and reused for the life of
# the process. create_app() forces that first use at startup so bad
# credentials stop the process before it serves traffic.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   client = SupabaseClient.from_settings(settings)
#   rows = client.table("supplements").select("*").limit(5).execute().data
# =============================================================================

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from supabase import Client, create_client

if TYPE_CHECKING:
    from app.config import Settings

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries a suggestion telling the operator how to fix the problem.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Lazily-initialized Supabase client.

    Uses the service_role key, which bypasses Row Level Security. This key
    must only ever live on the backend.

    Example:
        client = SupabaseClient(url, service_role_key)
        response = client.table("supplements").select("id,name").limit(5).execute()
    """

    def __init__(self, url: str, service_role_key: str):
        self._url = url
        self._service_role_key = service_role_key
        self._instance: Client | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> SupabaseClient:
        return cls(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)

    def get_client(self) -> Client:
        """
        Get or create the underlying Supabase client.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if self._instance is None:
            try:
                self._instance = create_client(self._url, self._service_role_key)
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY in your environment"
                ) from e
        return self._instance

    def table(self, name: str) -> Any:
        """Start a PostgREST query builder on `name`."""
        return self.get_client().table(name)
