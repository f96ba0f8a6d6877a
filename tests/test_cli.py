import json

import pytest

from core.cli import skillshare_admin
from core.cli.formatters import format_output
from core.db import db
from core.models import UserProfile


@pytest.fixture
def cli_db():
    db.reset()
    db.initialize("sqlite://")
    db.create_all_tables()
    yield db
    db.reset()


def test_check_config_passes_in_test_env(capsys):
    skillshare_admin.main(["check-config"])

    out = capsys.readouterr().out
    assert "Auth provider: jwt" in out
    assert "Configuration OK" in out


def test_seed_then_list_profiles(cli_db, capsys):
    skillshare_admin.main(["seed-catalog"])
    assert "Skills created:" in capsys.readouterr().out

    with cli_db.session() as session:
        profile = UserProfile(uid="cli-1", email="cli@example.com", display_name="Cli User", social_links=[])
        profile.set_tags("skill", ["python"])
        session.add(profile)

    skillshare_admin.main(["list-profiles", "--skill", "python", "--format", "json"])

    out = capsys.readouterr().out
    listed = json.loads(out[: out.rindex("]") + 1])
    assert [p["displayName"] for p in listed] == ["Cli User"]
    assert "email" not in listed[0]
    assert "Page 1/1 (1 matching)" in out


def test_invalid_page_exits_with_error(cli_db, capsys):
    with pytest.raises(SystemExit) as excinfo:
        skillshare_admin.main(["list-profiles", "--page", "0"])

    assert excinfo.value.code == 1
    assert "Validation failed" in capsys.readouterr().err


def test_formatters():
    profiles = [{"id": 1, "displayName": "Ann", "skills": ["go"], "university": "MIT"}]

    assert "Ann (id 1)" in format_output(profiles)
    assert "MIT" in format_output(profiles, "table")
    assert json.loads(format_output(profiles, "json")) == profiles
    assert format_output([], "table") == "No profiles found.\n"
