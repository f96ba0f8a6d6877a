import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool

from core.errors import ConflictError, UnavailableError
from core.db import build_engine
from core.models import ProfileTag, Skill, SkillCategory, UserProfile
from core.repositories import ProfileRepository, SkillCategoryRepository, SkillRepository


def test_count_unknown_filter_key_raises(test_session):
    repo = ProfileRepository(test_session)

    with pytest.raises(ValueError, match="Unknown filter key"):
        repo.count(typo_key=5)


def test_insert_duplicate_uid_raises_conflict(test_session, make_profile):
    make_profile(uid="dup")
    repo = ProfileRepository(test_session)

    with pytest.raises(ConflictError, match="Profile already exists for this user"):
        repo.insert(UserProfile(uid="dup", email="", display_name="Second", social_links=[]))

    assert repo.count() == 1


def test_conflicting_insert_keeps_pending_work_in_same_session(test_session, make_profile):
    make_profile(uid="taken")
    test_session.add(UserProfile(uid="pending", email="", display_name="Pending", social_links=[]))
    test_session.flush()
    repo = ProfileRepository(test_session)

    with pytest.raises(ConflictError):
        repo.insert(UserProfile(uid="taken", email="", display_name="Dup", social_links=[]))
    test_session.commit()

    assert sorted(p.uid for p in test_session.query(UserProfile)) == ["pending", "taken"]


def test_conflicting_insert_keeps_other_sessions_flushed_work(test_db):
    _, TestingSessionLocal, _ = test_db
    with TestingSessionLocal() as setup:
        setup.add(UserProfile(uid="taken", email="", display_name="Taken", social_links=[]))
        setup.commit()

    first = TestingSessionLocal()
    second = TestingSessionLocal()
    try:
        first.add(UserProfile(uid="alice", email="", display_name="Alice", social_links=[]))
        first.flush()

        with pytest.raises(ConflictError):
            ProfileRepository(second).insert(UserProfile(uid="taken", email="", display_name="Dup", social_links=[]))

        first.commit()
    finally:
        first.close()
        second.close()

    with TestingSessionLocal() as check:
        assert sorted(p.uid for p in check.query(UserProfile)) == ["alice", "taken"]


def test_static_pool_only_for_in_memory_sqlite(tmp_path):
    memory = build_engine("sqlite://")
    on_disk = build_engine(f"sqlite:///{tmp_path / 'skillshare.db'}")
    try:
        assert isinstance(memory.pool, StaticPool)
        assert not isinstance(on_disk.pool, StaticPool)
    finally:
        memory.dispose()
        on_disk.dispose()


def test_file_sqlite_sessions_commit_independently(tmp_path):
    from sqlalchemy.orm import sessionmaker

    from core.db import Base

    engine = build_engine(f"sqlite:///{tmp_path / 'skillshare.db'}")
    Base.metadata.create_all(bind=engine)
    SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)
    try:
        with SessionLocal() as session:
            session.add(UserProfile(uid="taken", email="", display_name="Taken", social_links=[]))
            session.commit()

        with SessionLocal() as session:
            with pytest.raises(ConflictError):
                ProfileRepository(session).insert(
                    UserProfile(uid="taken", email="", display_name="Dup", social_links=[])
                )
            ProfileRepository(session).insert(UserProfile(uid="bob", email="", display_name="Bob", social_links=[]))
            session.commit()

        with SessionLocal() as session:
            assert sorted(p.uid for p in session.query(UserProfile)) == ["bob", "taken"]
    finally:
        engine.dispose()


def test_find_by_uid_and_has_profile(test_session, make_profile):
    created = make_profile(uid="uid-find")
    repo = ProfileRepository(test_session)

    assert repo.find_by_uid("uid-find").id == created.id
    assert repo.find_by_uid("missing") is None
    assert repo.has_profile("uid-find") is True
    assert repo.has_profile("missing") is False


def test_update_profile_replaces_tags_and_touches_updated_at(test_session, make_profile):
    profile = make_profile(skills=["python", "go"])
    before = profile.updated_at
    repo = ProfileRepository(test_session)

    repo.update_profile(profile, {"bio": "New bio"}, {"skill": ["go", "rust"]})
    test_session.commit()

    reloaded = repo.find_by_id(profile.id)
    assert reloaded.bio == "New bio"
    assert reloaded.skills == ["go", "rust"]
    assert reloaded.updated_at != before


def test_update_profile_rejects_unknown_column(test_session, make_profile):
    profile = make_profile()

    with pytest.raises(ValueError, match="Unknown filter key"):
        ProfileRepository(test_session).update_profile(profile, {"not_a_column": 1})


def test_delete_profile_removes_tags(test_session, make_profile):
    profile = make_profile(skills=["python"], availability=["tutoring"])
    repo = ProfileRepository(test_session)

    repo.delete_profile(profile)
    test_session.commit()

    assert repo.count() == 0
    assert test_session.query(ProfileTag).count() == 0


def test_store_failure_surfaces_as_unavailable(test_session, monkeypatch):
    repo = ProfileRepository(test_session)

    def broken(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(test_session, "query", broken)

    with pytest.raises(UnavailableError):
        repo.find_by_uid("anyone")


def test_skill_listing_filters_and_orders(test_session):
    repo = SkillRepository(test_session)
    for name, category, level, description in [
        ("Python", "Programming", "beginner", "General purpose language"),
        ("Go", "Programming", "advanced", None),
        ("Figma", "Design", "beginner", "Interface design with Python plugins"),
    ]:
        repo.insert(Skill(name=name, category=category, level=level, description=description))
    test_session.commit()

    items, total = repo.list_skills(category="program", offset=0, limit=10)
    assert [s.name for s in items] == ["Go", "Python"]
    assert total == 2

    items, total = repo.list_skills(level="beginner", offset=0, limit=10)
    assert [s.name for s in items] == ["Figma", "Python"]

    # Name hits rank above description hits
    items, total = repo.list_skills(search="python", offset=0, limit=10)
    assert [s.name for s in items] == ["Python", "Figma"]
    assert total == 2


def test_category_name_lookup(test_session):
    repo = SkillCategoryRepository(test_session)
    repo.insert(SkillCategory(name="Design", description="Visual work"))
    test_session.commit()

    assert repo.name_exists("Design") is True
    assert repo.name_exists("design") is False
    assert repo.name_exists("Missing") is False
