"""
FastAPI dependency injection module.

Provides centralized dependencies for:
- Repositories
- Services
- Caching
- Pagination
"""

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from core.cache import RedisCache, cache
from core.constants import CATALOG_DEFAULT_PAGE_SIZE
from core.repositories import ProfileRepository
from core.search import PageRequest
from core.services import CatalogService, ProfileLifecycleService

from ..config import get_settings
from ..database import get_db

# =============================================================================
# Repository Dependencies
# =============================================================================


def get_profile_repository(db: Session = Depends(get_db)) -> ProfileRepository:
    """Get ProfileRepository instance."""
    return ProfileRepository(db)


# =============================================================================
# Cache Dependencies
# =============================================================================


def get_cache() -> RedisCache:
    """Get Redis cache instance (possibly unavailable; callers degrade)."""
    return cache


# =============================================================================
# Service Dependencies
# =============================================================================


def get_profile_service(
    db: Session = Depends(get_db),
    profile_repo: ProfileRepository = Depends(get_profile_repository),
) -> ProfileLifecycleService:
    """Get ProfileLifecycleService instance with injected repository."""
    return ProfileLifecycleService(db, profile_repo)


def get_catalog_service(
    db: Session = Depends(get_db),
    cache_client: RedisCache = Depends(get_cache),
) -> CatalogService:
    return CatalogService(db, cache_client)


# =============================================================================
# Pagination
# =============================================================================


def get_profile_page(
    page: int = Query(default=1, description="1-based page number"),
    limit: int | None = Query(default=None, description="Page size"),
) -> PageRequest:
    """
    Validated page request for profile listings.

    Out-of-range values are rejected rather than clamped.
    """
    settings = get_settings()
    return PageRequest.validated(
        page=page,
        limit=settings.default_page_size if limit is None else limit,
        max_limit=settings.max_page_size,
    )


def get_catalog_page(
    page: int = Query(default=1, description="1-based page number"),
    limit: int | None = Query(default=None, description="Page size"),
) -> PageRequest:
    return PageRequest.validated(
        page=page,
        limit=CATALOG_DEFAULT_PAGE_SIZE if limit is None else limit,
        max_limit=get_settings().max_page_size,
    )


__all__ = [
    "get_profile_repository",
    "get_cache",
    "get_profile_service",
    "get_catalog_service",
    "get_profile_page",
    "get_catalog_page",
]
