"""
Profile input normalisation and validation.

The API schemas already reject malformed bodies; these checks repeat the
rules for callers that reach the service directly (CLI, tests, jobs) and
produce the column/tag values the repository stores.
"""

from dataclasses import dataclass, field
from urllib.parse import urlparse

from email_validator import EmailNotValidError, validate_email

from core.constants import (
    BIO_MAX_LENGTH,
    DISPLAY_NAME_MAX_LENGTH,
    MAX_SOCIAL_LINKS,
    MAX_TAGS_PER_KIND,
    PHONE_MAX_LENGTH,
    PHOTO_URL_MAX_LENGTH,
    PLATFORM_MAX_LENGTH,
    SOCIAL_PLATFORMS,
    SOCIAL_URL_MAX_LENGTH,
    TAG_KIND_AVAILABILITY,
    TAG_KIND_INTEREST,
    TAG_KIND_SKILL,
    TAG_MAX_LENGTH,
    UNIVERSITY_MAX_LENGTH,
    YEAR_MAX_LENGTH,
)
from core.errors import FieldError, ValidationError

# (attribute, json name, max length)
_TEXT_FIELDS = (
    ("photo_url", "photoURL", PHOTO_URL_MAX_LENGTH),
    ("bio", "bio", BIO_MAX_LENGTH),
    ("university", "university", UNIVERSITY_MAX_LENGTH),
    ("year", "year", YEAR_MAX_LENGTH),
)

# (attribute, json name, tag kind)
_TAG_FIELDS = (
    ("skills", "skills", TAG_KIND_SKILL),
    ("interests", "interests", TAG_KIND_INTEREST),
    ("availability", "availability", TAG_KIND_AVAILABILITY),
)


@dataclass
class SocialLinkInput:
    platform: str
    url: str
    id: str | None = None


@dataclass
class ContactInput:
    """contactInfo as submitted. `social` is the legacy fixed-key form."""

    email: str | None = None
    phone: str | None = None
    social_links: list[SocialLinkInput] = field(default_factory=list)
    social: dict[str, str | None] = field(default_factory=dict)


@dataclass
class ProfileInput:
    """
    Submitted profile fields. None means "not provided".

    On update only provided fields change; an empty string clears an
    optional text field, and a provided contactInfo replaces the stored one.
    """

    display_name: str | None = None
    photo_url: str | None = None
    bio: str | None = None
    university: str | None = None
    year: str | None = None
    skills: list[str] | None = None
    interests: list[str] | None = None
    availability: list[str] | None = None
    contact: ContactInput | None = None


@dataclass
class ProfileChanges:
    """Validated values ready for the repository."""

    columns: dict = field(default_factory=dict)
    tags: dict[str, list[str]] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.columns or self.tags)


def is_http_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def normalize_tags(values: list[str]) -> list[str]:
    """Trim, drop blanks and collapse duplicates keeping first occurrence."""
    result: list[str] = []
    for value in values:
        value = (value or "").strip()
        if value and value not in result:
            result.append(value)
    return result


def merge_social_links(contact: ContactInput, errors: list[FieldError]) -> list[dict]:
    """
    Canonical link list: socialLinks first, then legacy social keys for
    platforms not already present.
    """
    links: list[dict] = []
    for index, link in enumerate(contact.social_links):
        path = f"contactInfo.socialLinks.{index}"
        platform = (link.platform or "").strip()
        url = (link.url or "").strip()
        if not platform:
            errors.append(FieldError(f"{path}.platform", "Platform is required"))
        elif len(platform) > PLATFORM_MAX_LENGTH:
            errors.append(
                FieldError(f"{path}.platform", f"Platform must be at most {PLATFORM_MAX_LENGTH} characters")
            )
        if len(url) > SOCIAL_URL_MAX_LENGTH or not is_http_url(url):
            errors.append(FieldError(f"{path}.url", "Link URL must be a valid http(s) URL"))
        links.append({"id": link.id or f"link-{index + 1}", "platform": platform, "url": url})

    present = {link["platform"].lower() for link in links}
    for platform, url in contact.social.items():
        url = (url or "").strip()
        if not url or platform.lower() in present:
            continue
        if platform not in SOCIAL_PLATFORMS:
            errors.append(FieldError(f"contactInfo.social.{platform}", "Unknown social platform"))
            continue
        if len(url) > SOCIAL_URL_MAX_LENGTH or not is_http_url(url):
            errors.append(FieldError(f"contactInfo.social.{platform}", "Link URL must be a valid http(s) URL"))
            continue
        links.append({"id": f"social-{platform}", "platform": platform, "url": url})
        present.add(platform)

    if len(links) > MAX_SOCIAL_LINKS:
        errors.append(
            FieldError("contactInfo.socialLinks", f"At most {MAX_SOCIAL_LINKS} social links are allowed")
        )
    return links


def _contact_columns(contact: ContactInput, errors: list[FieldError]) -> dict:
    email = (contact.email or "").strip()
    if email:
        try:
            email = validate_email(email, check_deliverability=False).normalized
        except EmailNotValidError:
            errors.append(FieldError("contactInfo.email", "Contact email must be valid"))
    phone = (contact.phone or "").strip()
    if len(phone) > PHONE_MAX_LENGTH:
        errors.append(FieldError("contactInfo.phone", f"Phone must be at most {PHONE_MAX_LENGTH} characters"))
    return {
        "contact_email": email or None,
        "contact_phone": phone or None,
        "social_links": merge_social_links(contact, errors),
    }


def validate_profile_input(data: ProfileInput, partial: bool = False) -> ProfileChanges:
    """
    Check every provided field and collect all failures.

    Args:
        data: Submitted fields
        partial: True for updates; required fields may then be omitted,
            but a provided displayName or skills list must still be valid

    Raises:
        ValidationError: listing every failing field
    """
    errors: list[FieldError] = []
    changes = ProfileChanges()

    if data.display_name is not None or not partial:
        name = (data.display_name or "").strip()
        if not name:
            errors.append(FieldError("displayName", "Display name is required"))
        elif len(name) > DISPLAY_NAME_MAX_LENGTH:
            errors.append(
                FieldError("displayName", f"Display name must be at most {DISPLAY_NAME_MAX_LENGTH} characters")
            )
        changes.columns["display_name"] = name

    for attr, name, limit in _TEXT_FIELDS:
        value = getattr(data, attr)
        if value is None:
            continue
        value = value.strip()
        if len(value) > limit:
            errors.append(FieldError(name, f"{name} must be at most {limit} characters"))
        if attr == "photo_url" and value and not is_http_url(value):
            errors.append(FieldError(name, "Photo URL must be a valid http(s) URL"))
        changes.columns[attr] = value or None

    for attr, name, kind in _TAG_FIELDS:
        values = getattr(data, attr)
        if values is None:
            if partial or kind != TAG_KIND_SKILL:
                continue
            values = []
        values = normalize_tags(values)
        if kind == TAG_KIND_SKILL and not values:
            errors.append(FieldError(name, "At least one skill is required"))
        if len(values) > MAX_TAGS_PER_KIND:
            errors.append(FieldError(name, f"At most {MAX_TAGS_PER_KIND} entries are allowed"))
        for index, value in enumerate(values):
            if len(value) > TAG_MAX_LENGTH:
                errors.append(FieldError(f"{name}.{index}", f"Entries must be at most {TAG_MAX_LENGTH} characters"))
        changes.tags[kind] = values

    if data.contact is not None:
        changes.columns.update(_contact_columns(data.contact, errors))
    elif not partial:
        changes.columns.update({"contact_email": None, "contact_phone": None, "social_links": []})

    if errors:
        raise ValidationError(errors)
    return changes


__all__ = [
    "SocialLinkInput",
    "ContactInput",
    "ProfileInput",
    "ProfileChanges",
    "is_http_url",
    "normalize_tags",
    "merge_social_links",
    "validate_profile_input",
]
