# =============================================================================
# core/ - Domain Models & Services
# =============================================================================
# - models/: Pydantic schemas for supplements, filters and chat
# - services/: Datastore-backed read operations
# =============================================================================
