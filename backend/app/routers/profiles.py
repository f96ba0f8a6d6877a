"""
Profile directory endpoints.

Public reads are always redacted: contact email/phone and the account
email only appear on /profiles/me and in the owner's own write responses.
Static paths (/me, /search) are registered before /{profile_id}.
"""

from fastapi import APIRouter, Depends, Query, status

from core.search import PageRequest, SearchFilters
from core.services import (
    Identity,
    ProfileLifecycleService,
    serialize_profile,
    serialize_public_profile,
)

from ..auth.dependencies import get_identity, get_optional_identity
from ..dependencies import get_profile_page, get_profile_service
from ..responses import ok, paginated
from ..schemas import ProfileCreateRequest, ProfileUpdateRequest

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("/me")
def get_my_profile(
    identity: Identity = Depends(get_identity),
    service: ProfileLifecycleService = Depends(get_profile_service),
):
    """The caller's own profile, including private contact details."""
    profile = service.get_own(identity)
    return ok(serialize_profile(profile, include_private=True))


@router.get("/search")
def search_profiles(
    skills: list[str] | None = Query(default=None, description="Match any of these skills (repeatable)"),
    availability: list[str] | None = Query(default=None, description="Match any availability (repeatable)"),
    university: str | None = Query(default=None, description="Case-insensitive substring"),
    year: str | None = Query(default=None, description="Exact year"),
    search_term: str | None = Query(default=None, alias="searchTerm", description="Name/bio text search"),
    page_request: PageRequest = Depends(get_profile_page),
    identity: Identity | None = Depends(get_optional_identity),
    service: ProfileLifecycleService = Depends(get_profile_service),
):
    filters = SearchFilters.build(
        skills=skills,
        availability=availability,
        university=university,
        year=year,
        search_term=search_term,
    )
    page = service.search(filters, page_request)
    return paginated(page.map(serialize_public_profile))


@router.get("")
def list_profiles(
    page_request: PageRequest = Depends(get_profile_page),
    identity: Identity | None = Depends(get_optional_identity),
    service: ProfileLifecycleService = Depends(get_profile_service),
):
    """All profiles, newest first."""
    page = service.search(SearchFilters(), page_request)
    return paginated(page.map(serialize_public_profile))


@router.get("/{profile_id}")
def get_profile(
    profile_id: int,
    service: ProfileLifecycleService = Depends(get_profile_service),
):
    profile = service.get_public(profile_id)
    return ok(serialize_public_profile(profile))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_profile(
    payload: ProfileCreateRequest,
    identity: Identity = Depends(get_identity),
    service: ProfileLifecycleService = Depends(get_profile_service),
):
    profile = service.create(identity, payload.to_input())
    return ok(serialize_profile(profile, include_private=True), message="Profile created successfully")


@router.put("/{profile_id}")
def update_profile(
    profile_id: int,
    payload: ProfileUpdateRequest,
    identity: Identity = Depends(get_identity),
    service: ProfileLifecycleService = Depends(get_profile_service),
):
    profile = service.update(identity, profile_id, payload.to_input())
    return ok(serialize_profile(profile, include_private=True), message="Profile updated successfully")


@router.delete("/{profile_id}")
def delete_profile(
    profile_id: int,
    identity: Identity = Depends(get_identity),
    service: ProfileLifecycleService = Depends(get_profile_service),
):
    service.delete(identity, profile_id)
    return ok(message="Profile deleted successfully")
