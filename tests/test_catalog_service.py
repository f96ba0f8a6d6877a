import pytest

from core.constants import DEFAULT_SKILL_CATEGORIES, DEFAULT_SKILLS
from core.errors import ConflictError, NotFoundError, ValidationError
from core.search import PageRequest
from core.services import CatalogService


def test_seed_defaults_is_idempotent(test_session, fake_cache):
    service = CatalogService(test_session, fake_cache)

    first = service.seed_defaults()
    second = service.seed_defaults()

    assert first["skillsCreated"] == len(DEFAULT_SKILLS)
    assert first["categoriesCreated"] == len(DEFAULT_SKILL_CATEGORIES)
    assert second["skillsCreated"] == 0
    assert second["categoriesCreated"] == 0
    assert second["totalSkills"] == len(DEFAULT_SKILLS)


def test_seed_leaves_populated_table_alone(test_session, fake_cache):
    service = CatalogService(test_session, fake_cache)
    service.create_category("Custom")

    result = service.seed_defaults()

    assert result["categoriesCreated"] == 0
    assert result["totalCategories"] == 1
    assert result["skillsCreated"] == len(DEFAULT_SKILLS)


def test_duplicate_skill_conflicts(test_session, fake_cache):
    service = CatalogService(test_session, fake_cache)
    service.create_skill("Python", "Programming", "beginner")

    with pytest.raises(ConflictError, match="Skill already exists"):
        service.create_skill("Python", "Programming", "advanced")


def test_create_skill_collects_errors(test_session, fake_cache):
    with pytest.raises(ValidationError) as excinfo:
        CatalogService(test_session, fake_cache).create_skill(" ", "", "expert")

    assert {error.field for error in excinfo.value.errors} == {"name", "category", "level"}


def test_list_skills_rejects_unknown_level(test_session, fake_cache):
    with pytest.raises(ValidationError):
        CatalogService(test_session, fake_cache).list_skills(PageRequest(), level="expert")


def test_listing_is_cached_and_writes_invalidate(test_session, fake_cache):
    service = CatalogService(test_session, fake_cache)
    service.create_skill("Python", "Programming", "beginner")

    page = service.list_skills(PageRequest(page=1, limit=10))
    assert [item["name"] for item in page.items] == ["Python"]
    assert len(fake_cache.store) == 1

    service.create_skill("Go", "Programming", "advanced")
    assert fake_cache.store == {}

    page = service.list_skills(PageRequest(page=1, limit=10))
    assert [item["name"] for item in page.items] == ["Go", "Python"]
    assert page.total == 2


def test_get_missing_skill_and_category(test_session, fake_cache):
    service = CatalogService(test_session, fake_cache)

    with pytest.raises(NotFoundError, match="Skill not found"):
        service.get_skill(42)
    with pytest.raises(NotFoundError, match="Skill category not found"):
        service.get_category(42)


def test_works_without_cache(test_session):
    # Shared singleton is disabled in tests; every call falls through to the store
    service = CatalogService(test_session)
    service.create_category("Design", "Visual work")

    page = service.list_categories(PageRequest(), search="design")

    assert page.total == 1
    assert page.items[0]["name"] == "Design"
