# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# Settings and the supplement service are built once in create_app() and
# stored on app.state; route handlers receive them using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from app.config import Settings
from core.services.supplement_service import SupplementService


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was created with."""
    return request.app.state.settings


def get_supplement_service(request: Request) -> SupplementService:
    """Shared supplement service instance."""
    return request.app.state.supplements


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
SupplementServiceDep = Annotated[SupplementService, Depends(get_supplement_service)]
