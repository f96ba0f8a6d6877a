"""
Unified SQLAlchemy models for SkillShare.

Single source of truth for all database models. Used by both CLI and backend.

Usage:
    from core.models import UserProfile, Skill, SkillCategory
"""

from .base import Base
from .catalog import Skill, SkillCategory
from .profile import ProfileTag, UserProfile

__all__ = [
    # Base
    "Base",
    # Profile
    "UserProfile",
    "ProfileTag",
    # Catalog
    "Skill",
    "SkillCategory",
]
