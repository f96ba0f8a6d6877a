"""User profile repository."""

from datetime import datetime, timezone
from typing import Any

from core.db import store_errors, translate_store_errors
from core.models import UserProfile
from core.search import Page, PageRequest, ProfileSearchEngine, SearchFilters

from .base import BaseRepository

PROFILE_CONFLICT_MESSAGE = "Profile already exists for this user"


class ProfileRepository(BaseRepository[UserProfile]):
    """Repository for UserProfile operations."""

    model = UserProfile

    def insert(self, instance: UserProfile, conflict_message: str | None = None) -> UserProfile:
        """
        Persist a new profile.

        The unique uid constraint is the final arbiter when two creates for
        the same identity race past the existence check.
        """
        return super().insert(instance, conflict_message or PROFILE_CONFLICT_MESSAGE)

    @translate_store_errors("find_profile_by_uid")
    def find_by_uid(self, uid: str) -> UserProfile | None:
        """Get the profile owned by an identity-provider uid."""
        return self.session.query(UserProfile).filter(UserProfile.uid == uid).first()

    def find_by_id(self, profile_id: int) -> UserProfile | None:
        return self.get_by_id(profile_id)

    def update_profile(
        self,
        profile: UserProfile,
        columns: dict[str, Any] | None = None,
        tags: dict[str, list[str]] | None = None,
    ) -> UserProfile:
        """
        Apply a partial update and refresh updated_at.

        Args:
            profile: Loaded profile to modify
            columns: Column values keyed by attribute name
            tags: Replacement tag lists keyed by tag kind
        """
        for key, value in (columns or {}).items():
            self._column(key)
            setattr(profile, key, value)
        for kind, values in (tags or {}).items():
            profile.set_tags(kind, values)
        profile.updated_at = datetime.now(timezone.utc)
        with store_errors("update_profile"):
            self.session.flush()
        return profile

    @translate_store_errors("delete_profile")
    def delete_profile(self, profile: UserProfile) -> None:
        """Delete a profile and its tags."""
        self.session.delete(profile)
        self.session.flush()

    def search(self, filters: SearchFilters, page_request: PageRequest) -> Page[UserProfile]:
        """Filtered, ranked page of profiles."""
        return ProfileSearchEngine(self.session).search(filters, page_request)

    def has_profile(self, uid: str) -> bool:
        """Check if an identity already owns a profile (efficient exists query)."""
        return self.exists_where(uid=uid)
