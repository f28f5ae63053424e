# =============================================================================
# app/routers/supplements.py - Supplement Endpoints
# =============================================================================
# Search page backing endpoints:
# - GET /api/filters: static filter vocabulary
# - GET /api/search: substring search over name/brand/description
# - GET /api/test-db: first rows of the table, for checking connectivity
#
# Datastore-backed handlers are plain functions so FastAPI runs the
# blocking supabase-py call in its threadpool.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Query

from app.dependencies import SupplementServiceDep
from core.models.supplement import FiltersResponse, SampleResponse, SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/filters", response_model=FiltersResponse)
async def get_filters():
    """Filter taxonomy for the Search page."""
    return FiltersResponse()


@router.get("/search", response_model=SearchResponse)
def search_supplements(
    supplements: SupplementServiceDep,
    q: Annotated[str, Query(description="Free-text search; blank returns unfiltered rows")] = "",
):
    """
    Search supplements.

    Case-insensitive substring match across name, brand and description,
    capped at the configured result limit. No ranking.
    """
    query = q.strip()
    results = supplements.search(query)
    logger.debug(f"Search {query!r} returned {len(results)} rows")
    return SearchResponse(query=query, results=results)


@router.get("/test-db", response_model=SampleResponse)
def test_db(supplements: SupplementServiceDep):
    """Return the first five supplement rows."""
    return SampleResponse(data=supplements.sample())
