"""Tests for the JSON document store server."""

import json

import pytest

from godrive.docstore import create_app


@pytest.fixture
def db_file(tmp_path):
    return tmp_path / "data" / "db.json"


@pytest.fixture
def client(db_file):
    app = create_app(str(db_file))
    app.config["TESTING"] = True
    return app.test_client()


class TestDocumentStore:
    """Test class for the document store endpoints."""

    def test_creates_empty_database(self, client, db_file):
        assert json.loads(db_file.read_text()) == {"users": [], "rides": []}
        assert client.get("/").get_json() == {"users": [], "rides": []}

    def test_insert_assigns_key(self, client, db_file):
        response = client.post("/users", json={"id": "P1", "role": "PASSENGER"})

        assert response.status_code == 201
        key = response.get_json()["_key"]
        assert key
        assert json.loads(db_file.read_text())["users"][0]["_key"] == key

    def test_duplicate_id_conflict(self, client):
        client.post("/users", json={"id": "P1"})

        response = client.post("/users", json={"id": "P1"})

        assert response.status_code == 409
        assert len(client.get("/users").get_json()) == 1

    def test_non_object_body(self, client):
        response = client.post("/users", json=[1, 2])
        assert response.status_code == 400

    def test_unknown_collection(self, client):
        assert client.get("/vehicles").status_code == 404

    def test_query_by_field(self, client):
        client.post("/rides", json={"id": "R1", "status": "REQUESTED", "driverId": None})
        client.post("/rides", json={"id": "R2", "status": "ACCEPTED", "driverId": "D1"})

        found = client.get("/rides/query?status=ACCEPTED").get_json()
        assert [d["id"] for d in found] == ["R2"]

        found = client.get("/rides/query?driverId=None").get_json()
        assert found == []

    def test_replace_keeps_key(self, client):
        key = client.post("/rides", json={"id": "R1", "status": "REQUESTED"}).get_json()["_key"]

        response = client.put(f"/rides/{key}", json={"id": "R1", "status": "CANCELLED"})

        assert response.status_code == 200
        stored = client.get(f"/rides/{key}").get_json()
        assert stored["status"] == "CANCELLED"
        assert stored["_key"] == key

    def test_missing_key(self, client):
        assert client.put("/rides/nope", json={"id": "R1"}).status_code == 404
        assert client.delete("/rides/nope").status_code == 404

    def test_delete_item_and_collection(self, client):
        key = client.post("/users", json={"id": "P1"}).get_json()["_key"]
        client.post("/users", json={"id": "P2"})

        assert client.delete(f"/users/{key}").get_json()["id"] == "P1"
        assert client.delete("/users").get_json() == {"deleted": 1}
        assert client.get("/users").get_json() == []
