"""
Core services with business logic.

Services own transactions and domain rules; routers and the CLI call them
with an explicit Identity and never touch repositories directly.
"""

from core.services.catalog_service import CatalogService
from core.services.identity import Identity
from core.services.profile_input import ContactInput, ProfileInput, SocialLinkInput
from core.services.profile_service import ProfileLifecycleService
from core.services.serializers import (
    serialize_category,
    serialize_profile,
    serialize_public_profile,
    serialize_skill,
)

__all__ = [
    "CatalogService",
    "ContactInput",
    "Identity",
    "ProfileInput",
    "ProfileLifecycleService",
    "SocialLinkInput",
    "serialize_category",
    "serialize_profile",
    "serialize_public_profile",
    "serialize_skill",
]
