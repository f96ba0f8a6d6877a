"""
SkillShare Core Library.

This package provides the core functionality for SkillShare: database
management, models, repositories, profile search, services and logging.

Usage:
    # Database
    from core.db import db, get_db
    from core.models import UserProfile, Skill, SkillCategory
    from core.repositories import ProfileRepository

    # Config
    from core.config import get_settings, Settings

    # Logging
    from core.logging import get_logger, configure_logging
"""

__version__ = "1.0.0"

# Lazy imports to avoid circular dependencies
# Users should import directly from submodules:
#   from core.db import db
#   from core.config import get_settings
#   from core.logging import get_logger
