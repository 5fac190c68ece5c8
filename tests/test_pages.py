from http import HTTPStatus


def test_status_page(client):
    response = client.get("/")
    assert response.status_code == HTTPStatus.OK
    assert response.headers["content-type"].startswith("text/html")
    assert "User Management API" in response.text
    assert "Running" in response.text


def test_favicon(client):
    response = client.get("/favicon.ico")
    assert response.status_code == HTTPStatus.OK
    assert response.headers["content-type"].startswith("image/svg+xml")
    assert response.text.startswith("<svg")


def test_health(client):
    response = client.get("/health")
    assert response.status_code == HTTPStatus.OK
    assert response.json() == {"status": "ok"}


def test_swagger_ui_is_public(client):
    response = client.get("/swagger")
    assert response.status_code == HTTPStatus.OK
    assert "swagger" in response.text.lower()


def test_openapi_document_lists_user_routes(client):
    spec = client.get("/api-docs/openapi.json").json()
    assert "/users" in spec["paths"]
    assert "/users/{user_id}" in spec["paths"]
