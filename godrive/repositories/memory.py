"""In-process repository backend."""

import logging
import threading
from typing import Dict, List, Optional

from godrive.errors import AlreadyExistsError, NotFoundError
from godrive.models import Ride, User, user_from_record
from godrive.repositories.base import Repository

logger = logging.getLogger(__name__)


class InMemoryRepository(Repository):
    """
    Repository keeping user and ride records in dicts keyed by id.

    Records, not objects, are stored: writes serialize the entity and reads
    rebuild a new one, so no caller ever holds a reference into the store.
    Dicts keep insertion order, which keeps listings stable.
    """

    def __init__(self):
        self._users: Dict[str, dict] = {}
        self._rides: Dict[str, dict] = {}
        self._guard = threading.Lock()

    def create_user(self, user: User) -> None:
        with self._guard:
            if user.id in self._users:
                raise AlreadyExistsError("User", user.id)
            self._users[user.id] = user.to_record()
        logger.debug(f"Stored user {user.id}")

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        with self._guard:
            record = self._users.get(user_id)
        return user_from_record(record) if record else None

    def get_all_users(self) -> List[User]:
        with self._guard:
            records = list(self._users.values())
        return [user_from_record(r) for r in records]

    def update_user(self, user_id: str, user: User) -> None:
        with self._guard:
            if user_id not in self._users:
                raise NotFoundError("User", user_id)
            self._users[user_id] = user.to_record()

    def delete_user(self, user_id: str) -> bool:
        with self._guard:
            return self._users.pop(user_id, None) is not None

    def delete_all_users(self) -> int:
        with self._guard:
            count = len(self._users)
            self._users.clear()
        return count

    def create_ride(self, ride: Ride) -> None:
        with self._guard:
            if ride.id in self._rides:
                raise AlreadyExistsError("Ride", ride.id)
            self._rides[ride.id] = ride.to_record()
        logger.debug(f"Stored ride {ride.id}")

    def get_ride_by_id(self, ride_id: str) -> Optional[Ride]:
        with self._guard:
            record = self._rides.get(ride_id)
        return Ride.from_record(record) if record else None

    def get_all_rides(self) -> List[Ride]:
        with self._guard:
            records = list(self._rides.values())
        return [Ride.from_record(r) for r in records]

    def update_ride(self, ride_id: str, ride: Ride) -> None:
        with self._guard:
            if ride_id not in self._rides:
                raise NotFoundError("Ride", ride_id)
            self._rides[ride_id] = ride.to_record()

    def delete_ride(self, ride_id: str) -> bool:
        with self._guard:
            return self._rides.pop(ride_id, None) is not None
