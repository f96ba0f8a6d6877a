"""
Skill catalog repositories.
"""

from sqlalchemy import desc, func, select

from core.constants import CATALOG_TEXT_WEIGHTS
from core.db import translate_store_errors
from core.models import Skill, SkillCategory
from core.search.text import contains_ci, relevance_score, text_match, tokenize

from .base import BaseRepository


class _NamedCatalogRepository(BaseRepository):
    """Shared listing logic for name-keyed catalog tables."""

    def _conditions(self, search: str | None, words: list[str]) -> list:
        conditions = []
        if search:
            columns = [getattr(self.model, name) for name in CATALOG_TEXT_WEIGHTS]
            conditions.append(text_match(columns, words))
        return conditions

    def name_exists(self, name: str) -> bool:
        """Exact, case-sensitive name lookup."""
        return self.exists_where(name=name)

    @translate_store_errors("list_catalog")
    def _list(self, conditions: list, words: list[str], offset: int, limit: int) -> tuple[list, int]:
        stmt = select(self.model)
        count_stmt = select(func.count(self.model.id))
        if conditions:
            stmt = stmt.where(*conditions)
            count_stmt = count_stmt.where(*conditions)

        if words:
            weighted = [(getattr(self.model, name), weight) for name, weight in CATALOG_TEXT_WEIGHTS.items()]
            stmt = stmt.order_by(desc(relevance_score(weighted, words)), self.model.name)
        else:
            stmt = stmt.order_by(self.model.name)

        items = list(self.session.scalars(stmt.offset(offset).limit(limit)).all())
        total = self.session.scalar(count_stmt) or 0
        return items, total


class SkillRepository(_NamedCatalogRepository):
    """Repository for Skill operations."""

    model = Skill

    def list_skills(
        self,
        search: str | None = None,
        category: str | None = None,
        level: str | None = None,
        offset: int = 0,
        limit: int = 50,
    ) -> tuple[list[Skill], int]:
        """
        Filtered skill listing.

        Returns:
            Tuple of (skills, total_count)
        """
        words = tokenize(search)
        conditions = self._conditions(search, words)
        if category:
            conditions.append(contains_ci(Skill.category, category))
        if level:
            conditions.append(Skill.level == level)
        return self._list(conditions, words, offset, limit)


class SkillCategoryRepository(_NamedCatalogRepository):
    """Repository for SkillCategory operations."""

    model = SkillCategory

    def list_categories(
        self,
        search: str | None = None,
        offset: int = 0,
        limit: int = 50,
    ) -> tuple[list[SkillCategory], int]:
        """
        Returns:
            Tuple of (categories, total_count)
        """
        words = tokenize(search)
        return self._list(self._conditions(search, words), words, offset, limit)
