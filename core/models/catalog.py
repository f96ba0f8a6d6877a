"""
Skill catalog SQLAlchemy models.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from core.constants import (
    CATALOG_DESCRIPTION_MAX_LENGTH,
    SKILL_CATEGORY_MAX_LENGTH,
    SKILL_NAME_MAX_LENGTH,
)

from .base import Base


class Skill(Base):
    """
    Catalog skill.

    Profiles reference skills by name, not id, so renaming a skill leaves
    older profile tags pointing at the previous name.
    """

    __tablename__ = "skills"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(SKILL_NAME_MAX_LENGTH), unique=True, nullable=False)
    category: Mapped[str] = mapped_column(String(SKILL_CATEGORY_MAX_LENGTH), nullable=False, index=True)
    level: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(String(CATALOG_DESCRIPTION_MAX_LENGTH), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )


class SkillCategory(Base):
    """Catalog category grouping skills."""

    __tablename__ = "skill_categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(SKILL_CATEGORY_MAX_LENGTH), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(String(CATALOG_DESCRIPTION_MAX_LENGTH), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
