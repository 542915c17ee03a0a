"""Storage contract shared by every GoDrive repository backend."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type, TypeVar

from godrive.errors import NotFoundError
from godrive.models import (
    Administrator, Driver, Passenger, Ride, RideStatus, User, UserRole,
)

U = TypeVar("U", bound=User)

ROLE_TYPES = {
    UserRole.DRIVER: Driver,
    UserRole.PASSENGER: Passenger,
    UserRole.ADMINISTRATOR: Administrator,
}

ROLE_NAMES = {
    UserRole.DRIVER: "Driver",
    UserRole.PASSENGER: "Passenger",
    UserRole.ADMINISTRATOR: "Administrator",
}


class Repository(ABC):
    """
    Keyed storage of users and rides.

    Every read returns a freshly built entity, so changes to a returned
    object are invisible to the store until passed back through an update.
    Updates replace the stored record wholesale.
    """

    # Users

    @abstractmethod
    def create_user(self, user: User) -> None:
        """Store a new user. Raises AlreadyExistsError on a duplicate id."""

    @abstractmethod
    def get_user_by_id(self, user_id: str) -> Optional[User]:
        """Get a user or None."""

    @abstractmethod
    def get_all_users(self) -> List[User]:
        pass

    def get_users_by_role(self, role: UserRole) -> List[User]:
        role = UserRole(role)
        return [u for u in self.get_all_users() if u.role == role]

    @abstractmethod
    def update_user(self, user_id: str, user: User) -> None:
        """Replace a stored user. Raises NotFoundError if absent."""

    @abstractmethod
    def delete_user(self, user_id: str) -> bool:
        """Remove a user, returning whether one existed."""

    @abstractmethod
    def delete_all_users(self) -> int:
        """Remove every user, returning how many were removed."""

    def search_users_by_name(self, name: str) -> List[User]:
        needle = name.lower()
        return [u for u in self.get_all_users() if needle in u.full_name.lower()]

    def resolve_user(self, user_id: str, role: UserRole) -> U:
        """
        Get a user that must exist and hold *role*.

        Args:
            user_id: ID of the user
            role: Role the user must have

        Returns:
            User: The Driver, Passenger or Administrator instance

        Raises:
            NotFoundError: If the user is absent or holds another role
        """
        role = UserRole(role)
        user = self.get_user_by_id(user_id)
        if user is None or user.role != role:
            raise NotFoundError(ROLE_NAMES[role], user_id)
        return user

    # Rides

    @abstractmethod
    def create_ride(self, ride: Ride) -> None:
        """Store a new ride. Raises AlreadyExistsError on a duplicate id."""

    @abstractmethod
    def get_ride_by_id(self, ride_id: str) -> Optional[Ride]:
        """Get a ride or None."""

    @abstractmethod
    def get_all_rides(self) -> List[Ride]:
        pass

    def get_rides_by_status(self, status: RideStatus) -> List[Ride]:
        status = RideStatus(status)
        return [r for r in self.get_all_rides() if r.status == status]

    def get_rides_by_passenger(self, passenger_id: str) -> List[Ride]:
        return [r for r in self.get_all_rides() if r.passenger_id == passenger_id]

    def get_rides_by_driver(self, driver_id: str) -> List[Ride]:
        return [r for r in self.get_all_rides() if r.driver_id == driver_id]

    @abstractmethod
    def update_ride(self, ride_id: str, ride: Ride) -> None:
        """Replace a stored ride. Raises NotFoundError if absent."""

    @abstractmethod
    def delete_ride(self, ride_id: str) -> bool:
        """Remove a ride, returning whether one existed."""

    # Statistics

    def get_statistics(self) -> Dict[str, Any]:
        """Count users and rides by role and status, from current state."""
        users = self.get_all_users()
        rides = self.get_all_rides()

        def users_with(role):
            return sum(1 for u in users if u.role == role)

        def rides_with(status):
            return sum(1 for r in rides if r.status == status)

        return {
            "totalUsers": len(users),
            "activeUsers": sum(1 for u in users if u.is_active),
            "drivers": users_with(UserRole.DRIVER),
            "passengers": users_with(UserRole.PASSENGER),
            "administrators": users_with(UserRole.ADMINISTRATOR),
            "totalRides": len(rides),
            "requestedRides": rides_with(RideStatus.REQUESTED),
            "acceptedRides": rides_with(RideStatus.ACCEPTED),
            "inProgressRides": rides_with(RideStatus.IN_PROGRESS),
            "completedRides": rides_with(RideStatus.COMPLETED),
            "cancelledRides": rides_with(RideStatus.CANCELLED),
        }

    # Lifecycle

    def connect(self) -> None:
        """Open backend resources. No-op by default."""

    def close(self) -> None:
        """Release backend resources. No-op by default."""
