"""
Catalog initialization endpoints.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from core.logging import get_logger
from core.services import CatalogService, Identity

from ..auth.dependencies import get_identity
from ..dependencies import get_catalog_service
from ..responses import ok

logger = get_logger("initialize")

router = APIRouter(prefix="/initialize", tags=["initialize"])


@router.post("/default-data")
def initialize_default_data(
    identity: Identity = Depends(get_identity),
    service: CatalogService = Depends(get_catalog_service),
):
    """Seed the default skills and categories into empty tables."""
    result = service.seed_defaults()
    logger.info("default_data_initialized", uid=identity.uid, **result)
    return ok(result, message="Default data initialization completed")


@router.get("/health")
def catalog_health(service: CatalogService = Depends(get_catalog_service)):
    """Catalog row counts; fails with the standard 500 envelope if the store is down."""
    counts = service.status()
    return ok(
        {
            "status": "healthy",
            "database": "connected",
            "skills": counts["skills"],
            "categories": counts["categories"],
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    )
