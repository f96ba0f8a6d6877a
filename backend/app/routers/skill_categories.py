"""
Skill category endpoints.
"""

from fastapi import APIRouter, Depends, Query, status

from core.search import PageRequest
from core.services import CatalogService, Identity, serialize_category

from ..auth.dependencies import get_identity
from ..dependencies import get_catalog_page, get_catalog_service
from ..responses import ok, paginated
from ..schemas import SkillCategoryCreateRequest

router = APIRouter(prefix="/skill-categories", tags=["skills"])


@router.get("")
def list_categories(
    search: str | None = Query(default=None, description="Name/description text search"),
    page_request: PageRequest = Depends(get_catalog_page),
    service: CatalogService = Depends(get_catalog_service),
):
    return paginated(service.list_categories(page_request, search=search))


@router.get("/{category_id}")
def get_category(category_id: int, service: CatalogService = Depends(get_catalog_service)):
    return ok(serialize_category(service.get_category(category_id)))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_category(
    payload: SkillCategoryCreateRequest,
    identity: Identity = Depends(get_identity),
    service: CatalogService = Depends(get_catalog_service),
):
    category = service.create_category(name=payload.name, description=payload.description)
    return ok(serialize_category(category), message="Skill category created successfully")
