"""
User profile SQLAlchemy models.
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.constants import (
    BIO_MAX_LENGTH,
    DISPLAY_NAME_MAX_LENGTH,
    PHONE_MAX_LENGTH,
    PHOTO_URL_MAX_LENGTH,
    TAG_KIND_AVAILABILITY,
    TAG_KIND_INTEREST,
    TAG_KIND_SKILL,
    TAG_MAX_LENGTH,
    UID_MAX_LENGTH,
    UNIVERSITY_MAX_LENGTH,
    YEAR_MAX_LENGTH,
)

from .base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserProfile(Base):
    """
    A user's public directory entry.

    Attributes:
        uid: Identity-provider user id; one profile per uid (unique constraint)
        email: Verified account email, copied from the identity on creation
        display_name, bio, university, year, photo_url: Display fields
        contact_email, contact_phone: Private contact details, redacted from public reads
        social_links: Ordered list of {id, platform, url}
        tags: Skills, interests and availability rows (see ProfileTag)
    """

    __tablename__ = "profiles"
    __table_args__ = (Index("ix_profiles_created_at", "created_at"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    uid: Mapped[str] = mapped_column(String(UID_MAX_LENGTH), unique=True, index=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    display_name: Mapped[str] = mapped_column(String(DISPLAY_NAME_MAX_LENGTH), nullable=False)
    photo_url: Mapped[str | None] = mapped_column(String(PHOTO_URL_MAX_LENGTH), nullable=True)
    bio: Mapped[str | None] = mapped_column(String(BIO_MAX_LENGTH), nullable=True)
    university: Mapped[str | None] = mapped_column(String(UNIVERSITY_MAX_LENGTH), nullable=True, index=True)
    year: Mapped[str | None] = mapped_column(String(YEAR_MAX_LENGTH), nullable=True, index=True)

    contact_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_phone: Mapped[str | None] = mapped_column(String(PHONE_MAX_LENGTH), nullable=True)
    social_links: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    # Relationships
    tags: Mapped[list["ProfileTag"]] = relationship(
        "ProfileTag",
        back_populates="profile",
        cascade="all, delete-orphan",
        order_by="ProfileTag.position",
        lazy="selectin",
    )

    def tag_values(self, kind: str) -> list[str]:
        """Tag values of one kind, in stored order."""
        return [tag.value for tag in sorted(self.tags, key=lambda t: t.position) if tag.kind == kind]

    def set_tags(self, kind: str, values: list[str]) -> None:
        """
        Replace the tags of one kind.

        Rows whose value survives are reused so the (profile, kind, value)
        unique constraint never sees a transient duplicate during flush.
        """
        existing = {tag.value: tag for tag in self.tags if tag.kind == kind}
        kept: list[ProfileTag] = []
        for position, value in enumerate(values):
            tag = existing.pop(value, None)
            if tag is None:
                tag = ProfileTag(kind=kind, value=value)
            tag.position = position
            kept.append(tag)
        others = [tag for tag in self.tags if tag.kind != kind]
        self.tags = others + kept

    @property
    def skills(self) -> list[str]:
        return self.tag_values(TAG_KIND_SKILL)

    @property
    def interests(self) -> list[str]:
        return self.tag_values(TAG_KIND_INTEREST)

    @property
    def availability(self) -> list[str]:
        return self.tag_values(TAG_KIND_AVAILABILITY)

    def is_owned_by(self, uid: str) -> bool:
        return self.uid == uid

    def __repr__(self) -> str:
        return f"<UserProfile id={self.id} uid={self.uid!r}>"


class ProfileTag(Base):
    """
    One skill, interest or availability value of a profile.

    Kept in its own table so membership filters run in the store against the
    (kind, value) index.
    """

    __tablename__ = "profile_tags"
    __table_args__ = (
        UniqueConstraint("profile_id", "kind", "value", name="uq_profile_tags_profile_kind_value"),
        Index("ix_profile_tags_kind_value", "kind", "value"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    profile_id: Mapped[int] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    kind: Mapped[str] = mapped_column(String(20), nullable=False)
    value: Mapped[str] = mapped_column(String(TAG_MAX_LENGTH), nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    profile: Mapped["UserProfile"] = relationship("UserProfile", back_populates="tags")
