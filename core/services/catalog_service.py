"""
Skill catalog service with cached listings and default seeding.
"""

from sqlalchemy.orm import Session

from core.cache import CacheKeys, RedisCache, cache
from core.constants import (
    CATALOG_DESCRIPTION_MAX_LENGTH,
    DEFAULT_SKILL_CATEGORIES,
    DEFAULT_SKILLS,
    SKILL_CATEGORY_MAX_LENGTH,
    SKILL_LEVELS,
    SKILL_NAME_MAX_LENGTH,
)
from core.db import store_errors
from core.errors import ConflictError, FieldError, NotFoundError, ValidationError
from core.logging import get_logger
from core.models import Skill, SkillCategory
from core.repositories import SkillCategoryRepository, SkillRepository
from core.search import Page, PageRequest

from .serializers import serialize_category, serialize_skill

logger = get_logger("catalog_service")


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def _check_text(errors: list[FieldError], field: str, value: str | None, limit: int, required: bool = False):
    if required and not value:
        errors.append(FieldError(field, f"{field.capitalize()} is required"))
    elif value and len(value) > limit:
        errors.append(FieldError(field, f"{field.capitalize()} must be at most {limit} characters"))


class CatalogService:
    """
    Skills and skill categories.

    Listings are cached as serialized pages under catalog:* keys; any write
    invalidates every catalog key. The cache is optional and never fails a call.
    """

    def __init__(self, session: Session, cache_client: RedisCache | None = None):
        self.session = session
        self.skills = SkillRepository(session)
        self.categories = SkillCategoryRepository(session)
        self.cache = cache_client or cache

    def _commit(self) -> None:
        with store_errors("commit_catalog"):
            self.session.commit()

    def _invalidate(self) -> None:
        deleted = self.cache.delete_pattern(CacheKeys.catalog_pattern())
        logger.debug("catalog_cache_invalidated", keys=deleted)

    # =========================================================================
    # Reads
    # =========================================================================

    def list_skills(
        self,
        page_request: PageRequest,
        search: str | None = None,
        category: str | None = None,
        level: str | None = None,
    ) -> Page[dict]:
        """
        Filtered skill listing, name order or relevance order when searching.

        Raises:
            ValidationError: level is not a known skill level
        """
        search, category, level = _clean(search), _clean(category), _clean(level)
        if level and level not in SKILL_LEVELS:
            raise ValidationError.single("level", f"Level must be one of: {', '.join(SKILL_LEVELS)}")

        key = CacheKeys.skill_list(
            search=search, category=category, level=level, page=page_request.page, limit=page_request.limit
        )

        def compute() -> dict:
            items, total = self.skills.list_skills(
                search=search,
                category=category,
                level=level,
                offset=page_request.offset,
                limit=page_request.limit,
            )
            return {"items": [serialize_skill(s) for s in items], "total": total}

        payload = self.cache.get_json_or_compute(key, compute, ttl=CacheKeys.TTL_MEDIUM)
        return Page(items=payload["items"], page=page_request.page, limit=page_request.limit, total=payload["total"])

    def list_categories(self, page_request: PageRequest, search: str | None = None) -> Page[dict]:
        search = _clean(search)
        key = CacheKeys.category_list(search=search, page=page_request.page, limit=page_request.limit)

        def compute() -> dict:
            items, total = self.categories.list_categories(
                search=search, offset=page_request.offset, limit=page_request.limit
            )
            return {"items": [serialize_category(c) for c in items], "total": total}

        payload = self.cache.get_json_or_compute(key, compute, ttl=CacheKeys.TTL_MEDIUM)
        return Page(items=payload["items"], page=page_request.page, limit=page_request.limit, total=payload["total"])

    def get_skill(self, skill_id: int) -> Skill:
        skill = self.skills.get_by_id(skill_id)
        if skill is None:
            raise NotFoundError("Skill not found")
        return skill

    def get_category(self, category_id: int) -> SkillCategory:
        category = self.categories.get_by_id(category_id)
        if category is None:
            raise NotFoundError("Skill category not found")
        return category

    def status(self) -> dict:
        """Row counts, used by the initialization health check."""
        return {"skills": self.skills.count(), "categories": self.categories.count()}

    # =========================================================================
    # Writes
    # =========================================================================

    def create_skill(
        self,
        name: str,
        category: str,
        level: str,
        description: str | None = None,
    ) -> Skill:
        """
        Raises:
            ValidationError: Missing name/category, bad level, limits exceeded
            ConflictError: A skill with this name exists
        """
        name, category, description = _clean(name), _clean(category), _clean(description)
        errors: list[FieldError] = []
        _check_text(errors, "name", name, SKILL_NAME_MAX_LENGTH, required=True)
        _check_text(errors, "category", category, SKILL_CATEGORY_MAX_LENGTH, required=True)
        _check_text(errors, "description", description, CATALOG_DESCRIPTION_MAX_LENGTH)
        if level not in SKILL_LEVELS:
            errors.append(FieldError("level", f"Level must be one of: {', '.join(SKILL_LEVELS)}"))
        if errors:
            raise ValidationError(errors)

        if self.skills.name_exists(name):
            raise ConflictError("Skill already exists")

        skill = self.skills.insert(
            Skill(name=name, category=category, level=level, description=description),
            conflict_message="Skill already exists",
        )
        self._commit()
        self._invalidate()
        logger.info("skill_created", skill_id=skill.id, name=name)
        return skill

    def create_category(self, name: str, description: str | None = None) -> SkillCategory:
        """
        Raises:
            ValidationError: Missing name, limits exceeded
            ConflictError: A category with this name exists
        """
        name, description = _clean(name), _clean(description)
        errors: list[FieldError] = []
        _check_text(errors, "name", name, SKILL_CATEGORY_MAX_LENGTH, required=True)
        _check_text(errors, "description", description, CATALOG_DESCRIPTION_MAX_LENGTH)
        if errors:
            raise ValidationError(errors)

        if self.categories.name_exists(name):
            raise ConflictError("Skill category already exists")

        category = self.categories.insert(
            SkillCategory(name=name, description=description),
            conflict_message="Skill category already exists",
        )
        self._commit()
        self._invalidate()
        logger.info("skill_category_created", category_id=category.id, name=name)
        return category

    def seed_defaults(self) -> dict:
        """
        Insert the default catalog into empty tables.

        A table that already holds rows is left untouched.
        """
        skills_created = 0
        categories_created = 0

        if self.categories.count() == 0:
            for data in DEFAULT_SKILL_CATEGORIES:
                self.categories.insert(SkillCategory(**data))
                categories_created += 1

        if self.skills.count() == 0:
            for data in DEFAULT_SKILLS:
                self.skills.insert(Skill(**data))
                skills_created += 1

        self._commit()
        if skills_created or categories_created:
            self._invalidate()

        result = {
            "skillsCreated": skills_created,
            "categoriesCreated": categories_created,
            "totalSkills": self.skills.count(),
            "totalCategories": self.categories.count(),
        }
        logger.info("catalog_seeded", **result)
        return result
