"""
Response serialization with contact redaction.
"""

from datetime import timezone

from core.constants import SOCIAL_PLATFORMS
from core.models import Skill, SkillCategory, UserProfile


def _isoformat(value) -> str | None:
    """UTC ISO-8601; naive values come from stores that drop the offset."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def legacy_social(links: list[dict]) -> dict[str, str]:
    """Fixed-key view of the well-known platforms, first link per platform wins."""
    social: dict[str, str] = {}
    for link in links:
        platform = (link.get("platform") or "").lower()
        if platform in SOCIAL_PLATFORMS and platform not in social:
            social[platform] = link.get("url", "")
    return social


def serialize_profile(profile: UserProfile, include_private: bool = False) -> dict:
    """
    Convert a UserProfile ORM object to its camelCase JSON shape.

    Args:
        profile: Loaded profile
        include_private: Owner view; adds the account email and the
            contact email/phone. Public reads must leave this False.
    """
    links = list(profile.social_links or [])
    contact: dict = {"socialLinks": links, "social": legacy_social(links)}
    data = {
        "id": profile.id,
        "uid": profile.uid,
        "displayName": profile.display_name,
        "photoURL": profile.photo_url,
        "bio": profile.bio,
        "skills": profile.skills,
        "interests": profile.interests,
        "availability": profile.availability,
        "university": profile.university,
        "year": profile.year,
        "contactInfo": contact,
        "createdAt": _isoformat(profile.created_at),
        "updatedAt": _isoformat(profile.updated_at),
    }
    if include_private:
        data["email"] = profile.email
        contact["email"] = profile.contact_email
        contact["phone"] = profile.contact_phone
    return data


def serialize_public_profile(profile: UserProfile) -> dict:
    return serialize_profile(profile, include_private=False)


def serialize_skill(skill: Skill) -> dict:
    return {
        "id": skill.id,
        "name": skill.name,
        "category": skill.category,
        "level": skill.level,
        "description": skill.description,
        "createdAt": _isoformat(skill.created_at),
        "updatedAt": _isoformat(skill.updated_at),
    }


def serialize_category(category: SkillCategory) -> dict:
    return {
        "id": category.id,
        "name": category.name,
        "description": category.description,
        "createdAt": _isoformat(category.created_at),
        "updatedAt": _isoformat(category.updated_at),
    }
