"""Tests for document store error handling in the HTTP repository."""

import pytest
import requests
import responses

from godrive.errors import StorageError
from godrive.repositories import DocumentRepository

TEST_BASE_URL = "http://localhost:3000"


class TestDocumentRepository:
    """Test class for the document store client."""

    @responses.activate
    def test_connect_fails_when_store_is_down(self):
        responses.add(
            responses.GET,
            f"{TEST_BASE_URL}/users",
            body=requests.ConnectionError("connection refused")
        )

        repo = DocumentRepository(base_url=TEST_BASE_URL)

        with pytest.raises(StorageError) as excinfo:
            repo.connect()

        assert "unavailable" in str(excinfo.value)

    @responses.activate
    def test_server_error_becomes_storage_error(self):
        responses.add(
            responses.GET,
            f"{TEST_BASE_URL}/rides",
            json={"error": "boom"},
            status=500
        )

        repo = DocumentRepository(base_url=TEST_BASE_URL)

        with pytest.raises(StorageError):
            repo.get_all_rides()

    @responses.activate
    def test_lookup_uses_logical_id(self):
        responses.add(
            responses.GET,
            f"{TEST_BASE_URL}/users/query",
            json=[],
            status=200
        )

        repo = DocumentRepository(base_url=TEST_BASE_URL)

        assert repo.get_user_by_id("P1") is None
        assert responses.calls[0].request.params == {"id": "P1"}

    @responses.activate
    def test_delete_all_users_reports_count(self):
        responses.add(
            responses.DELETE,
            f"{TEST_BASE_URL}/users",
            json={"deleted": 3},
            status=200
        )

        repo = DocumentRepository(base_url=TEST_BASE_URL)

        assert repo.delete_all_users() == 3
