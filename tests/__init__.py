# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the backend API:
# - test_cors.py: Origin registry, CORS decisions and gate middleware
# - test_routes.py: Every HTTP endpoint through the full middleware stack
# - test_config.py: Settings loading and validation
# - test_supplement_service.py: Query building against mocked Supabase
# - test_server.py: Shutdown drain reporting
#
# Run tests with: pytest
# =============================================================================
