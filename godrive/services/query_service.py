"""Read-only listings and statistics for the GoDrive application."""

from typing import Any, Dict, List, Optional

from godrive.models import RideStatus, UserRole
from godrive.repositories.base import Repository


class QueryService:
    """Display-safe projections over the repository; never writes."""

    def __init__(self, repository: Repository):
        self.repository = repository

    def get_user_info(self, user_id: str) -> Optional[Dict[str, Any]]:
        user = self.repository.get_user_by_id(user_id)
        return user.get_display_info() if user else None

    def list_all_users(self) -> List[Dict[str, Any]]:
        return [u.get_display_info() for u in self.repository.get_all_users()]

    def list_users_by_role(self, role: UserRole) -> List[Dict[str, Any]]:
        return [u.get_display_info() for u in self.repository.get_users_by_role(role)]

    def list_all_drivers(self) -> List[Dict[str, Any]]:
        return self.list_users_by_role(UserRole.DRIVER)

    def list_all_passengers(self) -> List[Dict[str, Any]]:
        return self.list_users_by_role(UserRole.PASSENGER)

    def list_available_drivers(self) -> List[Dict[str, Any]]:
        return [
            d.get_display_info()
            for d in self.repository.get_users_by_role(UserRole.DRIVER)
            if d.is_available
        ]

    def search_users(self, name: str) -> List[Dict[str, Any]]:
        """Users whose full name contains *name*, case-insensitively."""
        return [u.get_display_info() for u in self.repository.search_users_by_name(name)]

    def get_ride_info(self, ride_id: str) -> Optional[Dict[str, Any]]:
        ride = self.repository.get_ride_by_id(ride_id)
        return ride.get_display_info() if ride else None

    def list_all_rides(self) -> List[Dict[str, Any]]:
        return [r.get_display_info() for r in self.repository.get_all_rides()]

    def list_rides_by_status(self, status: RideStatus) -> List[Dict[str, Any]]:
        return [r.get_display_info() for r in self.repository.get_rides_by_status(status)]

    def list_rides_by_passenger(self, passenger_id: str) -> List[Dict[str, Any]]:
        return [r.get_display_info() for r in self.repository.get_rides_by_passenger(passenger_id)]

    def list_rides_by_driver(self, driver_id: str) -> List[Dict[str, Any]]:
        return [r.get_display_info() for r in self.repository.get_rides_by_driver(driver_id)]

    def list_available_rides(self) -> List[Dict[str, Any]]:
        """Rides still waiting for a driver."""
        return self.list_rides_by_status(RideStatus.REQUESTED)

    def get_system_statistics(self) -> Dict[str, Any]:
        return self.repository.get_statistics()
