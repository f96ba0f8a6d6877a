"""
Skill catalog endpoints.
"""

from fastapi import APIRouter, Depends, Query, status

from core.search import PageRequest
from core.services import CatalogService, Identity, serialize_skill

from ..auth.dependencies import get_identity
from ..dependencies import get_catalog_page, get_catalog_service
from ..responses import ok, paginated
from ..schemas import SkillCreateRequest

router = APIRouter(prefix="/skills", tags=["skills"])


@router.get("")
def list_skills(
    search: str | None = Query(default=None, description="Name/description text search"),
    category: str | None = Query(default=None, description="Case-insensitive category substring"),
    level: str | None = Query(default=None, description="beginner, intermediate or advanced"),
    page_request: PageRequest = Depends(get_catalog_page),
    service: CatalogService = Depends(get_catalog_service),
):
    page = service.list_skills(page_request, search=search, category=category, level=level)
    return paginated(page)


@router.get("/{skill_id}")
def get_skill(skill_id: int, service: CatalogService = Depends(get_catalog_service)):
    return ok(serialize_skill(service.get_skill(skill_id)))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_skill(
    payload: SkillCreateRequest,
    identity: Identity = Depends(get_identity),
    service: CatalogService = Depends(get_catalog_service),
):
    skill = service.create_skill(
        name=payload.name,
        category=payload.category,
        level=payload.level,
        description=payload.description,
    )
    return ok(serialize_skill(skill), message="Skill created successfully")
