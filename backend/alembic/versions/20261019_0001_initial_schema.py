"""initial schema

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("uid", sa.String(length=128), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("display_name", sa.String(length=100), nullable=False),
        sa.Column("photo_url", sa.String(length=512)),
        sa.Column("bio", sa.String(length=500)),
        sa.Column("university", sa.String(length=100)),
        sa.Column("year", sa.String(length=20)),
        sa.Column("contact_email", sa.String(length=255)),
        sa.Column("contact_phone", sa.String(length=40)),
        sa.Column("social_links", sa.JSON()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_profiles_uid", "profiles", ["uid"], unique=True)
    op.create_index("ix_profiles_university", "profiles", ["university"])
    op.create_index("ix_profiles_year", "profiles", ["year"])
    op.create_index("ix_profiles_created_at", "profiles", ["created_at"])

    op.create_table(
        "profile_tags",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "profile_id",
            sa.Integer(),
            sa.ForeignKey("profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("kind", sa.String(length=20), nullable=False),
        sa.Column("value", sa.String(length=100), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.UniqueConstraint("profile_id", "kind", "value", name="uq_profile_tags_profile_kind_value"),
    )
    op.create_index("ix_profile_tags_profile_id", "profile_tags", ["profile_id"])
    op.create_index("ix_profile_tags_kind_value", "profile_tags", ["kind", "value"])

    op.create_table(
        "skills",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=50), nullable=False, unique=True),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("level", sa.String(length=20), nullable=False),
        sa.Column("description", sa.String(length=200)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_skills_category", "skills", ["category"])
    op.create_index("ix_skills_level", "skills", ["level"])

    op.create_table(
        "skill_categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=50), nullable=False, unique=True),
        sa.Column("description", sa.String(length=200)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("skill_categories")
    op.drop_index("ix_skills_level", table_name="skills")
    op.drop_index("ix_skills_category", table_name="skills")
    op.drop_table("skills")
    op.drop_index("ix_profile_tags_kind_value", table_name="profile_tags")
    op.drop_index("ix_profile_tags_profile_id", table_name="profile_tags")
    op.drop_table("profile_tags")
    op.drop_index("ix_profiles_created_at", table_name="profiles")
    op.drop_index("ix_profiles_year", table_name="profiles")
    op.drop_index("ix_profiles_university", table_name="profiles")
    op.drop_index("ix_profiles_uid", table_name="profiles")
    op.drop_table("profiles")
