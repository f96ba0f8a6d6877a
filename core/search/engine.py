"""
Profile query engine.

Translates SearchFilters into a single store query. Every predicate,
the relevance ordering and the pagination window are applied by the
database, so totals and page contents always describe the full match set.
"""

from sqlalchemy import and_, desc, exists, false, func, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from core.constants import PROFILE_TEXT_WEIGHTS, TAG_KIND_AVAILABILITY, TAG_KIND_SKILL
from core.db import store_errors
from core.logging import get_logger, log_timing
from core.models import ProfileTag, UserProfile

from .filters import Page, PageRequest, SearchFilters
from .text import contains_ci, relevance_score, text_match, tokenize

logger = get_logger("search")


def _has_any_tag(kind: str, values: tuple[str, ...]):
    """Profile carries at least one of the values under the given tag kind."""
    return exists().where(
        and_(
            ProfileTag.profile_id == UserProfile.id,
            ProfileTag.kind == kind,
            ProfileTag.value.in_(values),
        )
    )


def build_conditions(filters: SearchFilters, words: list[str]) -> list:
    """Conjunction of all active filter dimensions."""
    conditions = []
    if filters.skills:
        conditions.append(_has_any_tag(TAG_KIND_SKILL, filters.skills))
    if filters.availability:
        conditions.append(_has_any_tag(TAG_KIND_AVAILABILITY, filters.availability))
    if filters.university:
        conditions.append(contains_ci(UserProfile.university, filters.university))
    if filters.year:
        conditions.append(UserProfile.year == filters.year)
    if filters.search_term:
        # A term with no word characters matches nothing
        if words:
            text_columns = [getattr(UserProfile, name) for name in PROFILE_TEXT_WEIGHTS]
            conditions.append(text_match(text_columns, words))
        else:
            conditions.append(false())
    return conditions


class ProfileSearchEngine:
    """
    Filtered, ranked and paginated profile listing.

    Without a search term results are newest first. With one they are
    ordered by weighted relevance, ties broken newest first; the id is the
    final tie-breaker so pages never overlap.
    """

    def __init__(self, session: Session):
        self.session = session

    def _select(self, filters: SearchFilters, words: list[str]) -> Select:
        stmt = select(UserProfile)
        conditions = build_conditions(filters, words)
        if conditions:
            stmt = stmt.where(*conditions)
        return stmt

    @log_timing("profile_search", logger)
    def search(self, filters: SearchFilters, page_request: PageRequest) -> Page[UserProfile]:
        words = tokenize(filters.search_term)
        stmt = self._select(filters, words)

        if words:
            weighted = [(getattr(UserProfile, name), weight) for name, weight in PROFILE_TEXT_WEIGHTS.items()]
            score = relevance_score(weighted, words)
            stmt = stmt.order_by(desc(score), desc(UserProfile.created_at), desc(UserProfile.id))
        else:
            stmt = stmt.order_by(desc(UserProfile.created_at), desc(UserProfile.id))

        stmt = stmt.offset(page_request.offset).limit(page_request.limit)

        with store_errors("search_profiles"):
            items = list(self.session.scalars(stmt).all())
        total = self.count(filters, words)

        return Page(items=items, page=page_request.page, limit=page_request.limit, total=total)

    def count(self, filters: SearchFilters, words: list[str] | None = None) -> int:
        """Size of the full match set, independent of pagination."""
        if words is None:
            words = tokenize(filters.search_term)
        stmt = select(func.count(UserProfile.id))
        conditions = build_conditions(filters, words)
        if conditions:
            stmt = stmt.where(*conditions)
        with store_errors("count_profiles"):
            return self.session.scalar(stmt) or 0


__all__ = ["ProfileSearchEngine", "build_conditions"]
