from core.constants import DEFAULT_SKILL_CATEGORIES, DEFAULT_SKILLS


def test_initialize_requires_auth(test_app_client):
    client, _ = test_app_client

    assert client.post("/api/initialize/default-data").status_code == 401


def test_initialize_seeds_once(test_app_client, auth_headers):
    client, _ = test_app_client

    first = client.post("/api/initialize/default-data", headers=auth_headers())
    second = client.post("/api/initialize/default-data", headers=auth_headers())

    assert first.status_code == 200
    assert first.json()["data"]["skillsCreated"] == len(DEFAULT_SKILLS)
    assert second.json()["data"]["skillsCreated"] == 0
    assert second.json()["message"] == "Default data initialization completed"

    health = client.get("/api/initialize/health").json()["data"]
    assert health["status"] == "healthy"
    assert health["skills"] == len(DEFAULT_SKILLS)
    assert health["categories"] == len(DEFAULT_SKILL_CATEGORIES)


def test_skill_listing_filters(test_app_client, auth_headers):
    client, _ = test_app_client
    client.post("/api/initialize/default-data", headers=auth_headers())

    resp = client.get("/api/skills", params={"category": "creative"})
    body = resp.json()
    assert resp.status_code == 200
    assert [s["name"] for s in body["data"]] == ["Design", "Photography"]
    assert body["pagination"]["total"] == 2
    assert body["pagination"]["limit"] == 50

    resp = client.get("/api/skills", params={"level": "advanced", "limit": 1})
    body = resp.json()
    assert [s["name"] for s in body["data"]] == ["Machine Learning"]
    assert body["pagination"] == {"page": 1, "limit": 1, "total": 2, "totalPages": 2}


def test_skill_listing_rejects_unknown_level(test_app_client):
    client, _ = test_app_client

    resp = client.get("/api/skills", params={"level": "guru"})

    assert resp.status_code == 400
    assert resp.json()["data"][0]["field"] == "level"


def test_create_and_fetch_skill(test_app_client, auth_headers):
    client, _ = test_app_client
    payload = {"name": "Rust", "category": "Programming", "level": "advanced", "description": "Systems"}

    resp = client.post("/api/skills", json=payload, headers=auth_headers())
    assert resp.status_code == 201
    skill = resp.json()["data"]
    assert skill["name"] == "Rust"

    assert client.get(f"/api/skills/{skill['id']}").json()["data"]["level"] == "advanced"
    assert client.post("/api/skills", json=payload, headers=auth_headers()).status_code == 409
    assert client.get("/api/skills/9999").status_code == 404


def test_create_skill_requires_level(test_app_client, auth_headers):
    client, _ = test_app_client

    resp = client.post("/api/skills", json={"name": "Rust", "category": "Programming"}, headers=auth_headers())

    assert resp.status_code == 400
    assert resp.json()["data"][0]["field"] == "level"


def test_categories(test_app_client, auth_headers):
    client, _ = test_app_client

    resp = client.post("/api/skill-categories", json={"name": "Music"}, headers=auth_headers())
    assert resp.status_code == 201
    category_id = resp.json()["data"]["id"]

    assert client.get(f"/api/skill-categories/{category_id}").json()["data"]["name"] == "Music"
    assert client.get("/api/skill-categories", params={"search": "music"}).json()["pagination"]["total"] == 1
    assert client.post("/api/skill-categories", json={"name": "Music"}, headers=auth_headers()).status_code == 409
    assert client.post("/api/skill-categories", json={"name": "Art"}).status_code == 401
