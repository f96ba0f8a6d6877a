"""
Profile lifecycle: create, read, update and delete with ownership checks.
"""

from sqlalchemy.orm import Session

from core.db import store_errors
from core.errors import ConflictError, ForbiddenError, NotFoundError, UnauthenticatedError
from core.logging import get_logger
from core.models import UserProfile
from core.repositories import ProfileRepository
from core.repositories.profile_repository import PROFILE_CONFLICT_MESSAGE
from core.search import Page, PageRequest, SearchFilters

from .identity import Identity
from .profile_input import ProfileInput, validate_profile_input

logger = get_logger("profile_service")


class ProfileLifecycleService:
    """
    Business operations on profiles.

    Every mutating call takes the caller's Identity explicitly; the stored
    uid and email always come from it, never from submitted data.
    """

    def __init__(self, session: Session, repository: ProfileRepository | None = None):
        self.session = session
        self.repository = repository or ProfileRepository(session)

    def _commit(self) -> None:
        with store_errors("commit_profile"):
            self.session.commit()

    @staticmethod
    def _require(identity: Identity | None) -> Identity:
        if identity is None or not identity.uid:
            raise UnauthenticatedError()
        return identity

    def _load_owned(self, identity: Identity, profile_id: int, action: str) -> UserProfile:
        profile = self.repository.find_by_id(profile_id)
        if profile is None:
            raise NotFoundError("Profile not found")
        if not profile.is_owned_by(identity.uid):
            logger.warning(
                "profile_update_forbidden",
                action=action,
                profile_id=profile_id,
                uid=identity.uid,
            )
            raise ForbiddenError(f"Not authorized to {action} this profile")
        return profile

    def get_own(self, identity: Identity) -> UserProfile:
        """The caller's profile, or NotFoundError if they have none yet."""
        identity = self._require(identity)
        profile = self.repository.find_by_uid(identity.uid)
        if profile is None:
            raise NotFoundError("Profile not found")
        return profile

    def get_public(self, profile_id: int) -> UserProfile:
        profile = self.repository.find_by_id(profile_id)
        if profile is None:
            raise NotFoundError("Profile not found")
        return profile

    def search(self, filters: SearchFilters, page_request: PageRequest) -> Page[UserProfile]:
        return self.repository.search(filters, page_request)

    def create(self, identity: Identity, data: ProfileInput) -> UserProfile:
        """
        Create the caller's profile.

        Raises:
            ValidationError: Missing display name or skills, limits exceeded
            ConflictError: The caller already has a profile
        """
        identity = self._require(identity)
        changes = validate_profile_input(data)

        if self.repository.has_profile(identity.uid):
            raise ConflictError(PROFILE_CONFLICT_MESSAGE)

        profile = UserProfile(uid=identity.uid, email=identity.email, **changes.columns)
        for kind, values in changes.tags.items():
            profile.set_tags(kind, values)

        self.repository.insert(profile)
        self._commit()

        logger.info("profile_created", profile_id=profile.id, uid=identity.uid)
        return profile

    def update(self, identity: Identity, profile_id: int, data: ProfileInput) -> UserProfile:
        """
        Apply a partial update to a profile the caller owns.

        Raises:
            NotFoundError: No such profile
            ForbiddenError: The profile belongs to someone else; nothing is changed
            ValidationError: A provided field is invalid
        """
        identity = self._require(identity)
        profile = self._load_owned(identity, profile_id, "update")
        changes = validate_profile_input(data, partial=True)

        self.repository.update_profile(profile, changes.columns, changes.tags)
        self._commit()

        logger.info(
            "profile_updated",
            profile_id=profile.id,
            uid=identity.uid,
            fields=sorted(list(changes.columns) + list(changes.tags)),
        )
        return profile

    def delete(self, identity: Identity, profile_id: int) -> None:
        """Hard-delete a profile the caller owns."""
        identity = self._require(identity)
        profile = self._load_owned(identity, profile_id, "delete")

        self.repository.delete_profile(profile)
        self._commit()

        logger.info("profile_deleted", profile_id=profile_id, uid=identity.uid)
