# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App factory, middleware setup, error handlers
# - config.py: Environment variable loading and settings
# - cors.py: Origin registry and CORS decisions
# - middleware.py: Request context and CORS gate middleware
# - server.py: uvicorn entry point with shutdown drain
# - routers/: API endpoint definitions organized by feature
#
# The app layer is thin - it handles HTTP concerns and delegates
# datastore access to the core/ package.
# =============================================================================
