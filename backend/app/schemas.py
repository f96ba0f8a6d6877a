"""
Pydantic schemas for request validation.

Bodies use camelCase field names and reject unknown fields. Profile bodies
additionally accept the identity fields a client may echo back (uid, email,
id, createdAt, updatedAt) and drop them; the server always sets those.
"""

from typing import Annotated, Any, Literal

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
)
from pydantic.alias_generators import to_camel

from core.constants import (
    BIO_MAX_LENGTH,
    CATALOG_DESCRIPTION_MAX_LENGTH,
    DISPLAY_NAME_MAX_LENGTH,
    MAX_SOCIAL_LINKS,
    MAX_TAGS_PER_KIND,
    PHONE_MAX_LENGTH,
    PHOTO_URL_MAX_LENGTH,
    PLATFORM_MAX_LENGTH,
    SKILL_CATEGORY_MAX_LENGTH,
    SKILL_NAME_MAX_LENGTH,
    SOCIAL_URL_MAX_LENGTH,
    TAG_MAX_LENGTH,
    UNIVERSITY_MAX_LENGTH,
    YEAR_MAX_LENGTH,
)
from core.services import ContactInput, ProfileInput, SocialLinkInput
from core.services.profile_input import is_http_url


def _check_url(value: str | None) -> str | None:
    if value and not is_http_url(value):
        raise ValueError("must be a valid http(s) URL")
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _require_skill(values: list[str] | None) -> list[str] | None:
    if values is not None and not any(values):
        raise ValueError("At least one skill is required")
    return values


Tag = Annotated[str, StringConstraints(strip_whitespace=True, max_length=TAG_MAX_LENGTH)]
TagList = Annotated[list[Tag], Field(max_length=MAX_TAGS_PER_KIND)]
SkillList = Annotated[TagList, AfterValidator(_require_skill)]
LinkUrl = Annotated[str, StringConstraints(max_length=SOCIAL_URL_MAX_LENGTH), AfterValidator(_check_url)]
OptionalLinkUrl = Annotated[LinkUrl | None, BeforeValidator(_blank_to_none)]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        str_strip_whitespace=True,
    )


# =============================================================================
# Profiles
# =============================================================================


class SocialLinkSchema(CamelModel):
    id: str | None = Field(default=None, max_length=64)
    platform: str = Field(min_length=1, max_length=PLATFORM_MAX_LENGTH)
    url: LinkUrl


class LegacySocialSchema(CamelModel):
    """Fixed-key contactInfo.social object; empty strings mean unset."""

    linkedin: OptionalLinkUrl = None
    github: OptionalLinkUrl = None
    twitter: OptionalLinkUrl = None
    instagram: OptionalLinkUrl = None
    whatsapp: OptionalLinkUrl = None


class ContactInfoSchema(CamelModel):
    email: Annotated[EmailStr | None, BeforeValidator(_blank_to_none)] = None
    phone: Annotated[str | None, BeforeValidator(_blank_to_none)] = Field(default=None, max_length=PHONE_MAX_LENGTH)
    social_links: list[SocialLinkSchema] = Field(default_factory=list, max_length=MAX_SOCIAL_LINKS)
    social: LegacySocialSchema | None = None

    def to_input(self) -> ContactInput:
        return ContactInput(
            email=self.email,
            phone=self.phone,
            social_links=[
                SocialLinkInput(platform=link.platform, url=link.url, id=link.id) for link in self.social_links
            ],
            social=self.social.model_dump(exclude_none=True) if self.social else {},
        )


class _ProfileBody(CamelModel):
    # Accepted and ignored: the server owns these
    uid: Any = Field(default=None, exclude=True)
    email: Any = Field(default=None, exclude=True)
    id: Any = Field(default=None, exclude=True)
    created_at: Any = Field(default=None, exclude=True)
    updated_at: Any = Field(default=None, exclude=True)

    photo_url: Annotated[str | None, AfterValidator(_check_url)] = Field(
        default=None, alias="photoURL", max_length=PHOTO_URL_MAX_LENGTH
    )
    bio: str | None = Field(default=None, max_length=BIO_MAX_LENGTH)
    university: str | None = Field(default=None, max_length=UNIVERSITY_MAX_LENGTH)
    year: str | None = Field(default=None, max_length=YEAR_MAX_LENGTH)
    interests: TagList | None = None
    availability: TagList | None = None
    contact_info: ContactInfoSchema | None = None

    def to_input(self) -> ProfileInput:
        return ProfileInput(
            display_name=getattr(self, "display_name", None),
            photo_url=self.photo_url,
            bio=self.bio,
            university=self.university,
            year=self.year,
            skills=getattr(self, "skills", None),
            interests=self.interests,
            availability=self.availability,
            contact=self.contact_info.to_input() if self.contact_info else None,
        )


class ProfileCreateRequest(_ProfileBody):
    display_name: str = Field(min_length=1, max_length=DISPLAY_NAME_MAX_LENGTH)
    skills: SkillList


class ProfileUpdateRequest(_ProfileBody):
    """Partial update; omitted fields are left unchanged."""

    display_name: str | None = Field(default=None, min_length=1, max_length=DISPLAY_NAME_MAX_LENGTH)
    skills: SkillList | None = None


# =============================================================================
# Catalog
# =============================================================================


class SkillCreateRequest(CamelModel):
    name: str = Field(min_length=1, max_length=SKILL_NAME_MAX_LENGTH)
    category: str = Field(min_length=1, max_length=SKILL_CATEGORY_MAX_LENGTH)
    level: Literal["beginner", "intermediate", "advanced"]
    description: str | None = Field(default=None, max_length=CATALOG_DESCRIPTION_MAX_LENGTH)


class SkillCategoryCreateRequest(CamelModel):
    name: str = Field(min_length=1, max_length=SKILL_CATEGORY_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=CATALOG_DESCRIPTION_MAX_LENGTH)
