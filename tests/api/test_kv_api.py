"""
HTTP tests for the string, list and hash passthrough routes.
"""

import pytest


def test_string_roundtrip(client):
    assert client.post("/set-string", params={"key": "greeting", "value": "hello"}).status_code == 200

    response = client.get("/get-string", params={"key": "greeting"})
    assert response.status_code == 200
    assert response.text == "Value for key greeting: hello\n"


def test_get_string_accepts_post(client):
    client.get("/set-string", params={"key": "k", "value": "v"})
    assert client.post("/get-string", params={"key": "k"}).text == "Value for key k: v\n"


def test_missing_string_is_not_found(client):
    response = client.get("/get-string", params={"key": "absent"})
    assert response.status_code == 404


def test_non_utf8_string_is_rendered_with_replacement(client):
    client.portal.call(client.app.state.cache.set, "raw", b"\xffok")

    response = client.get("/get-string", params={"key": "raw"})
    assert response.status_code == 200
    assert response.text == "Value for key raw: \ufffdok\n"


def test_list_appends(client):
    client.post("/set-list", params=[("key", "letters"), ("value", "a"), ("value", "b")])
    client.post("/set-list", params=[("key", "letters"), ("value", "c")])

    response = client.get("/get-list", params={"key": "letters"})
    assert response.status_code == 200
    assert response.text == "Values for key letters: [a b c]\n"


def test_missing_list_is_empty(client):
    assert client.get("/get-list", params={"key": "none"}).text == "Values for key none: []\n"


def test_hash_roundtrip(client):
    client.post("/set-hash", params={"key": "profile", "field": "name", "value": "ann"})

    response = client.get("/get-hash", params={"key": "profile", "field": "name"})
    assert response.status_code == 200
    assert response.text == "Value for field name in key profile: ann\n"

    assert client.get("/get-hash", params={"key": "profile", "field": "zip"}).status_code == 404


@pytest.mark.parametrize(
    "path, params",
    [
        ("/set-string", {"key": "k"}),
        ("/set-string", {"value": "v"}),
        ("/get-string", {}),
        ("/set-list", {"key": "k"}),
        ("/get-list", {}),
        ("/set-hash", {"key": "k", "field": "f"}),
        ("/get-hash", {"key": "k"}),
    ],
)
def test_missing_parameters_are_rejected(client, path, params):
    response = client.post(path, params=params)
    assert response.status_code == 400
    assert response.json()["detail"].startswith("Missing")


def test_wrong_type_is_an_internal_error(client):
    client.post("/set-list", params={"key": "letters", "value": "a"})
    assert client.get("/get-string", params={"key": "letters"}).status_code == 500


def test_passthrough_keys_do_not_touch_the_user_collection(client):
    client.post("/user", json={"username": "ann", "email": "a@x.com"})
    client.post("/set-string", params={"key": "greeting", "value": "hello"})

    assert client.get("/users").json() == [{"id": 1, "username": "ann", "email": "a@x.com"}]
