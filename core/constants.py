"""
Application constants for SkillShare.

Contains field limits, tag vocabularies, search weights and the default
skill catalog used by the seeding command.
"""

# =============================================================================
# Profile Field Limits
# =============================================================================

UID_MAX_LENGTH = 128
DISPLAY_NAME_MAX_LENGTH = 100
BIO_MAX_LENGTH = 500
UNIVERSITY_MAX_LENGTH = 100
YEAR_MAX_LENGTH = 20
PHOTO_URL_MAX_LENGTH = 512
PHONE_MAX_LENGTH = 40
TAG_MAX_LENGTH = 100
MAX_TAGS_PER_KIND = 50
MAX_SOCIAL_LINKS = 20
SOCIAL_URL_MAX_LENGTH = 512
PLATFORM_MAX_LENGTH = 50

# =============================================================================
# Tags
# =============================================================================

TAG_KIND_SKILL = "skill"
TAG_KIND_INTEREST = "interest"
TAG_KIND_AVAILABILITY = "availability"
TAG_KINDS = (TAG_KIND_SKILL, TAG_KIND_INTEREST, TAG_KIND_AVAILABILITY)

# Values the client offers; availability is not restricted to these
AVAILABILITY_OPTIONS = ["projects", "tutoring", "both"]

# Well-known keys of the legacy contactInfo.social object
SOCIAL_PLATFORMS = ["linkedin", "github", "twitter", "instagram", "whatsapp"]

# =============================================================================
# Catalog
# =============================================================================

SKILL_LEVELS = ["beginner", "intermediate", "advanced"]
SKILL_NAME_MAX_LENGTH = 50
SKILL_CATEGORY_MAX_LENGTH = 50
CATALOG_DESCRIPTION_MAX_LENGTH = 200
CATALOG_DEFAULT_PAGE_SIZE = 50

DEFAULT_SKILLS = [
    {"name": "JavaScript", "category": "Programming", "level": "intermediate", "description": "Web development with JavaScript"},
    {"name": "React", "category": "Programming", "level": "intermediate", "description": "React library for building user interfaces"},
    {"name": "Python", "category": "Programming", "level": "intermediate", "description": "Python programming language"},
    {"name": "Machine Learning", "category": "Data Science", "level": "advanced", "description": "Machine learning algorithms and techniques"},
    {"name": "Design", "category": "Creative", "level": "intermediate", "description": "UI/UX design principles"},
    {"name": "Photography", "category": "Creative", "level": "beginner", "description": "Digital photography techniques"},
    {"name": "Public Speaking", "category": "Communication", "level": "intermediate", "description": "Effective public speaking skills"},
    {"name": "Writing", "category": "Communication", "level": "intermediate", "description": "Technical and creative writing"},
    {"name": "Mathematics", "category": "Academic", "level": "advanced", "description": "Advanced mathematics and statistics"},
    {"name": "Languages", "category": "Communication", "level": "intermediate", "description": "Foreign language proficiency"},
]

DEFAULT_SKILL_CATEGORIES = [
    {"name": "Programming", "description": "Software development and coding"},
    {"name": "Data Science", "description": "Data analysis and machine learning"},
    {"name": "Creative", "description": "Art, design, and creative skills"},
    {"name": "Communication", "description": "Speaking, writing, and language skills"},
    {"name": "Academic", "description": "Academic subjects and research"},
    {"name": "Business", "description": "Business and entrepreneurship skills"},
    {"name": "Technical", "description": "Technical and engineering skills"},
]

# =============================================================================
# Text Search Weights
# =============================================================================

# A term found in the heading field counts double
PROFILE_TEXT_WEIGHTS = {"display_name": 2, "bio": 1}
CATALOG_TEXT_WEIGHTS = {"name": 2, "description": 1}

MAX_SEARCH_TERMS = 10
