"""
Search request and paginated result types.
"""

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

from core.errors import FieldError, ValidationError

T = TypeVar("T")
U = TypeVar("U")


def _clean_tags(values: Iterable[str] | None) -> tuple[str, ...]:
    """Strip, drop blanks and de-duplicate while keeping order."""
    cleaned: list[str] = []
    for value in values or ():
        value = value.strip()
        if value and value not in cleaned:
            cleaned.append(value)
    return tuple(cleaned)


def _clean_text(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class SearchFilters:
    """
    Conjunctive profile filter.

    Empty tag sets and blank strings impose no constraint on their dimension.
    """

    skills: tuple[str, ...] = ()
    availability: tuple[str, ...] = ()
    university: str | None = None
    year: str | None = None
    search_term: str | None = None

    @classmethod
    def build(
        cls,
        skills: Iterable[str] | None = None,
        availability: Iterable[str] | None = None,
        university: str | None = None,
        year: str | None = None,
        search_term: str | None = None,
    ) -> "SearchFilters":
        return cls(
            skills=_clean_tags(skills),
            availability=_clean_tags(availability),
            university=_clean_text(university),
            year=_clean_text(year),
            search_term=_clean_text(search_term),
        )

    @property
    def is_empty(self) -> bool:
        return not (self.skills or self.availability or self.university or self.year or self.search_term)


@dataclass(frozen=True)
class PageRequest:
    """1-based page number and page size."""

    page: int = 1
    limit: int = 20

    @classmethod
    def validated(cls, page: int = 1, limit: int = 20, max_limit: int = 100) -> "PageRequest":
        """
        Reject out-of-range values instead of clamping them.

        Raises:
            ValidationError: listing every offending parameter
        """
        errors = []
        if page < 1:
            errors.append(FieldError("page", "Page must be a positive integer"))
        if not 1 <= limit <= max_limit:
            errors.append(FieldError("limit", f"Limit must be between 1 and {max_limit}"))
        if errors:
            raise ValidationError(errors)
        return cls(page=page, limit=limit)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class Page(Generic[T]):
    """One page of results plus the size of the full match set."""

    items: list[T]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def map(self, fn: Callable[[T], U]) -> "Page[U]":
        return Page(items=[fn(item) for item in self.items], page=self.page, limit=self.limit, total=self.total)

    def pagination(self) -> dict:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "totalPages": self.total_pages,
        }


__all__ = ["SearchFilters", "PageRequest", "Page"]
