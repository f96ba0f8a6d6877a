"""
Repository pattern implementations for data access.

Repositories provide a clean abstraction over database operations and
translate storage failures into domain errors.

Usage:
    from core.repositories import ProfileRepository
    from core.db import db

    with db.session() as session:
        repo = ProfileRepository(session)
        profile = repo.find_by_uid(uid)
"""

from .base import BaseRepository
from .catalog_repository import SkillCategoryRepository, SkillRepository
from .profile_repository import ProfileRepository

__all__ = [
    "BaseRepository",
    "ProfileRepository",
    "SkillRepository",
    "SkillCategoryRepository",
]
