"""Repository backend talking to the GoDrive document store over HTTP."""

import logging
from typing import Any, Dict, List, Optional

import requests

from godrive import config
from godrive.errors import AlreadyExistsError, NotFoundError, StorageError
from godrive.models import Ride, RideStatus, User, UserRole, user_from_record
from godrive.repositories.base import Repository

logger = logging.getLogger(__name__)

USERS = "users"
RIDES = "rides"

# Field the document store keys documents by; distinct from the logical ``id``
PHYSICAL_KEY = "_key"


class DocumentRepository(Repository):
    """
    Repository storing records as JSON documents in the document store.

    Documents are looked up by their logical ``id`` field through the
    store's query endpoint; the store's own ``_key`` is used only to address
    a found document for replacement or deletion. Updates send the full
    record, the same replace discipline as the in-memory backend.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or config.DOCSTORE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.DOCSTORE_TIMEOUT

    def connect(self) -> None:
        """Check that the document store answers."""
        try:
            response = requests.get(f"{self.base_url}/{USERS}", timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise StorageError(f"Document store at {self.base_url} is unavailable: {str(e)}")
        logger.info(f"Connected to document store at {self.base_url}")

    # Low level document access

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        try:
            return requests.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise StorageError(f"Document store request failed: {str(e)}")

    @staticmethod
    def _check(response: requests.Response, action: str) -> None:
        try:
            response.raise_for_status()
        except requests.RequestException as e:
            raise StorageError(f"Failed to {action}: {str(e)}")

    def _query(self, collection: str, **filters) -> List[Dict[str, Any]]:
        response = self._request("GET", f"/{collection}/query", params=filters)
        if response.status_code == 404:
            return []
        self._check(response, f"query {collection}")
        return response.json() or []

    def _list(self, collection: str) -> List[Dict[str, Any]]:
        response = self._request("GET", f"/{collection}")
        self._check(response, f"list {collection}")
        return response.json() or []

    def _find(self, collection: str, entity_id: str) -> Optional[Dict[str, Any]]:
        documents = self._query(collection, id=entity_id)
        return next((d for d in documents if d.get("id") == entity_id), None)

    def _insert(self, collection: str, kind: str, record: Dict[str, Any]) -> None:
        response = self._request("POST", f"/{collection}", json=record)
        if response.status_code == 409:
            raise AlreadyExistsError(kind, record["id"])
        self._check(response, f"create {kind.lower()}")

    def _replace(self, collection: str, kind: str, entity_id: str, record: Dict[str, Any]) -> None:
        document = self._find(collection, entity_id)
        if document is None:
            raise NotFoundError(kind, entity_id)
        response = self._request("PUT", f"/{collection}/{document[PHYSICAL_KEY]}", json=record)
        if response.status_code == 404:
            raise NotFoundError(kind, entity_id)
        self._check(response, f"update {kind.lower()}")

    def _remove(self, collection: str, entity_id: str) -> bool:
        document = self._find(collection, entity_id)
        if document is None:
            return False
        response = self._request("DELETE", f"/{collection}/{document[PHYSICAL_KEY]}")
        if response.status_code == 404:
            return False
        self._check(response, f"delete from {collection}")
        return True

    # Users

    def create_user(self, user: User) -> None:
        self._insert(USERS, "User", user.to_record())

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        document = self._find(USERS, user_id)
        return user_from_record(document) if document else None

    def get_all_users(self) -> List[User]:
        return [user_from_record(d) for d in self._list(USERS)]

    def get_users_by_role(self, role: UserRole) -> List[User]:
        return [user_from_record(d) for d in self._query(USERS, role=UserRole(role).value)]

    def update_user(self, user_id: str, user: User) -> None:
        self._replace(USERS, "User", user_id, user.to_record())

    def delete_user(self, user_id: str) -> bool:
        return self._remove(USERS, user_id)

    def delete_all_users(self) -> int:
        response = self._request("DELETE", f"/{USERS}")
        self._check(response, "delete users")
        return response.json().get("deleted", 0)

    # Rides

    def create_ride(self, ride: Ride) -> None:
        self._insert(RIDES, "Ride", ride.to_record())

    def get_ride_by_id(self, ride_id: str) -> Optional[Ride]:
        document = self._find(RIDES, ride_id)
        return Ride.from_record(document) if document else None

    def get_all_rides(self) -> List[Ride]:
        return [Ride.from_record(d) for d in self._list(RIDES)]

    def get_rides_by_status(self, status: RideStatus) -> List[Ride]:
        return [Ride.from_record(d) for d in self._query(RIDES, status=RideStatus(status).value)]

    def get_rides_by_passenger(self, passenger_id: str) -> List[Ride]:
        return [Ride.from_record(d) for d in self._query(RIDES, passengerId=passenger_id)]

    def get_rides_by_driver(self, driver_id: str) -> List[Ride]:
        return [Ride.from_record(d) for d in self._query(RIDES, driverId=driver_id)]

    def update_ride(self, ride_id: str, ride: Ride) -> None:
        self._replace(RIDES, "Ride", ride_id, ride.to_record())

    def delete_ride(self, ride_id: str) -> bool:
        return self._remove(RIDES, ride_id)
