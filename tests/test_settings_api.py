from fastapi.testclient import TestClient

from appsettings.api.factory import create_api

PAYLOAD = {
    "key": "app.version",
    "value": "1.0.0",
    "description": "Current version of the application",
    "category": "General",
}


def _create(client: TestClient, **overrides):
    return client.post("/", json={**PAYLOAD, **overrides})


def test_create_returns_201_with_location(client: TestClient):
    response = _create(client, isEncrypted=True)

    assert response.status_code == 201
    assert response.headers["location"] == "/app.version"
    body = response.json()
    assert body["key"] == "app.version"
    assert body["isEncrypted"] is True
    assert body["id"]
    assert body["createdAt"] == body["updatedAt"]


def test_create_duplicate_returns_409(client: TestClient):
    _create(client)

    response = _create(client, value="2.0.0")

    assert response.status_code == 409
    error = response.json()["error"]
    assert error["code"] == "SETTING_KEY_CONFLICT"
    assert error["message"] == "Setting with this key already exists"
    assert client.get("/app.version").json()["value"] == "1.0.0"


def test_create_rejects_missing_value(client: TestClient):
    response = client.post("/", json={"key": "app.name"})

    assert response.status_code == 422
    assert response.json()["error"]["type"] == "ValidationError"


def test_get_and_list(client: TestClient):
    _create(client)
    _create(client, key="app.theme.primary_color", value="#1976d2", category="Theme")

    assert client.get("/app.version").json()["value"] == "1.0.0"
    assert len(client.get("/").json()) == 2

    missing = client.get("/app.unknown")
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "SETTING_NOT_FOUND"


def test_category_listing(client: TestClient):
    _create(client)
    _create(client, key="app.theme.primary_color", value="#1976d2", category="Theme")

    general = client.get("/category/General")
    assert general.status_code == 200
    assert [s["key"] for s in general.json()] == ["app.version"]

    unused = client.get("/category/Nothing")
    assert unused.status_code == 200
    assert unused.json() == []


def test_update_forces_path_key(client: TestClient):
    created = _create(client).json()

    response = client.put(
        "/app.version",
        json={"key": "renamed", "value": "2.0.0", "is_encrypted": True},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["key"] == "app.version"
    assert body["value"] == "2.0.0"
    assert body["isEncrypted"] is True
    assert body["category"] is None
    assert body["id"] == created["id"]
    assert body["createdAt"] == created["createdAt"]
    assert client.get("/renamed").status_code == 404


def test_update_missing_returns_404(client: TestClient):
    response = client.put("/missing", json={"key": "missing", "value": "x"})

    assert response.status_code == 404


def test_delete(client: TestClient):
    _create(client)

    response = client.delete("/app.version")
    assert response.status_code == 204
    assert response.content == b""

    assert client.get("/app.version").status_code == 404
    assert client.delete("/app.version").status_code == 404


def test_health(client: TestClient):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert "timestamp" in body


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/missing", headers={"X-Request-ID": "req-42"})

    assert response.headers["x-request-id"] == "req-42"
    assert response.json()["request_id"] == "req-42"


def test_create_rejects_key_with_slash_before_storing(client: TestClient):
    response = _create(client, key="app/name")

    assert response.status_code == 422
    assert client.get("/").json() == []


def test_location_percent_encodes_non_ascii_key(client: TestClient):
    response = _create(client, key="app.名前")

    assert response.status_code == 201
    location = response.headers["location"]
    assert location == "/app.%E5%90%8D%E5%89%8D"
    assert client.get(location).json()["key"] == "app.名前"


def test_location_percent_encodes_reserved_characters(client: TestClient):
    response = _create(client, key="a b?c")

    assert response.status_code == 201
    location = response.headers["location"]
    assert location == "/a%20b%3Fc"
    assert client.get(location).json()["key"] == "a b?c"


def test_location_includes_mount_prefix(engine):
    app = create_api(
        engine=engine, docs_url=None, redoc_url=None, mount_prefix="/settings"
    )
    with TestClient(app) as prefixed:
        response = prefixed.post("/settings/", json=PAYLOAD)

    assert response.headers["location"] == "/settings/app.version"
