import pytest
from fastapi.testclient import TestClient

from litemark.config import Settings
from litemark.main import create_app


@pytest.fixture
def client(tmp_path):
    settings = Settings(
        STORAGE_DRIVER="json",
        DATA_DIR=str(tmp_path / "data"),
        BACKUP_STORAGE_DRIVER="json",
        BACKUP_DIR=str(tmp_path / "backup"),
        JWT_SECRET_KEY="test-secret",
        ADMIN_USERNAME="admin",
        ADMIN_PASSWORD="pw",
    )
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def auth(client):
    response = client.post("/api/auth/login", json={"username": "admin", "password": "pw"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "no-store" in response.headers["Cache-Control"]


def test_login_rejects_bad_credentials(client):
    assert client.post("/api/auth/login", json={"username": "admin", "password": "nope"}).status_code == 401
    assert client.post("/api/auth/login", json={"username": "admin"}).status_code == 400


@pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer not-a-token"}])
def test_write_endpoints_require_token(client, headers):
    response = client.post("/api/bookmarks", json={"title": "A", "url": "a.test"}, headers=headers)

    assert response.status_code == 401


def test_bookmark_crud_flow(client, auth):
    created = client.post("/api/bookmarks", json={"title": "Example", "url": "example.com", "category": "Dev"}, headers=auth)
    assert created.status_code == 201
    body = created.json()
    assert body["url"] == "https://example.com"
    assert "createdAt" in body

    hidden = client.post("/api/bookmarks", json={"title": "Hidden", "url": "h.test", "visible": False}, headers=auth)
    assert hidden.status_code == 201

    public = client.get("/api/bookmarks").json()
    assert [b["title"] for b in public] == ["Example"]
    everything = client.get("/api/bookmarks/all", headers=auth).json()
    assert [b["title"] for b in everything] == ["Example", "Hidden"]

    updated = client.put(f"/api/bookmarks/{body['id']}", json={"title": "Renamed", "url": "example.com"}, headers=auth)
    assert updated.status_code == 200
    assert updated.json()["title"] == "Renamed"
    assert updated.json()["category"] is None

    deleted = client.delete(f"/api/bookmarks/{body['id']}", headers=auth)
    assert deleted.status_code == 200
    assert deleted.json()["id"] == body["id"]
    assert client.get("/api/bookmarks/all", headers=auth).json()[0]["title"] == "Hidden"


def test_errors_map_to_status_codes(client, auth):
    invalid = client.post("/api/bookmarks", json={"title": " ", "url": "a.test"}, headers=auth)
    assert invalid.status_code == 400
    assert invalid.json()["detail"]

    missing = client.delete("/api/bookmarks/nope", headers=auth)
    assert missing.status_code == 404

    missing_update = client.put("/api/bookmarks/nope", json={"title": "A", "url": "a.test"}, headers=auth)
    assert missing_update.status_code == 404


def test_reorder_endpoints(client, auth):
    ids = [
        client.post("/api/bookmarks", json={"title": t, "url": f"{t}.test", "category": c}, headers=auth).json()["id"]
        for t, c in [("a", "Dev"), ("b", "News"), ("c", "Dev"), ("d", None)]
    ]

    reordered = client.post("/api/bookmarks/reorder", json={"order": [ids[3], ids[0]]}, headers=auth)
    assert reordered.status_code == 200
    assert [b["id"] for b in reordered.json()] == [ids[3], ids[0], ids[1], ids[2]]

    by_category = client.post("/api/bookmarks/categories/reorder", json={"order": ["News", ""]}, headers=auth)
    assert by_category.status_code == 200
    assert [b["id"] for b in by_category.json()] == [ids[1], ids[3], ids[0], ids[2]]
    assert [b["id"] for b in client.get("/api/bookmarks").json()] == [ids[1], ids[3], ids[0], ids[2]]


def test_category_reorder_accepts_null_as_uncategorized(client, auth):
    ids = [
        client.post("/api/bookmarks", json={"title": t, "url": f"{t}.test", "category": c}, headers=auth).json()["id"]
        for t, c in [("a", "Dev"), ("b", None)]
    ]

    response = client.post("/api/bookmarks/categories/reorder", json={"order": [None, "Dev"]}, headers=auth)

    assert response.status_code == 200
    assert [b["id"] for b in response.json()] == [ids[1], ids[0]]


def test_cors_preflight_returns_no_content(client):
    response = client.options("/api/bookmarks", headers={
        "Origin": "http://localhost",
        "Access-Control-Request-Method": "POST",
    })

    assert response.status_code == 204
    assert response.content == b""
    assert response.headers["access-control-allow-origin"] == "http://localhost"
    assert "no-store" in response.headers["Cache-Control"]


def test_settings_endpoints(client, auth):
    assert client.get("/api/settings").json() == {"theme": "light", "siteTitle": "个人书签", "siteIcon": "🔖"}

    updated = client.put("/api/settings", json={"siteTitle": "My Links"}, headers=auth)
    assert updated.status_code == 200

    themed = client.put("/api/settings/theme", json={"theme": "dark"}, headers=auth)
    assert themed.json() == {"theme": "dark", "siteTitle": "My Links", "siteIcon": "🔖"}

    assert client.put("/api/settings/theme", json={"theme": "neon"}, headers=auth).status_code == 400
    assert client.put("/api/settings", json={"theme": "dark"}).status_code == 401


def test_export_and_import(client, auth, tmp_path):
    client.post("/api/bookmarks", json={"title": "Old", "url": "old.test"}, headers=auth)

    exported = client.get("/api/backup/export", headers=auth)
    assert exported.status_code == 200
    assert exported.headers["Content-Disposition"].startswith('attachment; filename="litemark-backup-')
    assert [b["title"] for b in exported.json()["bookmarks"]] == ["Old"]

    imported = client.post("/api/backup/import", json={
        "overwrite": True,
        "bookmarks": [{"title": "New", "url": "new.test"}, {"title": "", "url": "x.test"}],
    }, headers=auth)
    assert imported.status_code == 200
    result = imported.json()
    assert result["importedBookmarks"] == 1
    assert result["totalBookmarks"] == 2
    assert len(result["errors"]) == 1
    assert [b["title"] for b in client.get("/api/bookmarks").json()] == ["New"]

    assert client.post("/api/backup/import", json={}, headers=auth).status_code == 400


def test_writes_are_mirrored_to_backup_directory(tmp_path):
    settings = Settings(
        STORAGE_DRIVER="json",
        DATA_DIR=str(tmp_path / "data"),
        BACKUP_STORAGE_DRIVER="json",
        BACKUP_DIR=str(tmp_path / "backup"),
        ADMIN_PASSWORD="pw",
    )
    with TestClient(create_app(settings)) as client:
        token = client.post("/api/auth/login", json={"username": "admin", "password": "pw"}).json()["token"]
        client.post("/api/bookmarks", json={"title": "A", "url": "a.test"},
                    headers={"Authorization": f"Bearer {token}"})

    # 关闭时会等待后台备份完成
    assert (tmp_path / "backup" / "bookmarks.json").exists()
