import logging
from http import HTTPStatus


def _request_records(caplog):
    return [r for r in caplog.records if r.name == "user_api.requests"]


def test_request_and_response_are_logged(auth_client, caplog):
    caplog.set_level(logging.INFO, logger="user_api.requests")

    response = auth_client.get("/users/42")
    assert response.status_code == HTTPStatus.NOT_FOUND

    incoming, outgoing = [r.getMessage() for r in _request_records(caplog)]
    assert incoming == "Incoming request: GET /users/42 from testclient"
    assert outgoing.startswith("Outgoing response: GET /users/42 => 404 (")
    assert outgoing.endswith(" ms)")


def test_logging_does_not_alter_response(auth_client, caplog):
    caplog.set_level(logging.INFO, logger="user_api.requests")

    response = auth_client.post(
        "/users", json={"firstName": "Ann", "lastName": "Lee", "email": "ann@x.com"}
    )
    assert response.status_code == HTTPStatus.CREATED
    assert response.json()["email"] == "ann@x.com"
    assert response.headers["Location"].startswith("/users/")
    assert "=> 201" in _request_records(caplog)[-1].getMessage()


def test_rejected_requests_skip_request_logging(client, caplog):
    caplog.set_level(logging.INFO, logger="user_api.requests")

    client.get("/users")

    assert _request_records(caplog) == []
