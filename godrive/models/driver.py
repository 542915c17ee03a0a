"""Driver entity for the GoDrive application."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from godrive.errors import InvalidArgumentError
from godrive.models.contact import Contact
from godrive.models.location import GeoPoint
from godrive.models.rating import Rating, average_rating
from godrive.models.user import User, UserRole
from godrive.models.vehicle import Vehicle

DRIVER_PERMISSIONS = [
    "view_ride_requests",
    "accept_rides",
    "start_ride",
    "complete_ride",
    "view_earnings",
    "update_location",
    "set_availability",
]


class Driver(User):
    """
    Represents a driver in the ride-hailing system.

    ``total_rides`` and ``earnings`` only grow, and only through
    ``record_completed_ride``.

    Attributes:
        driver_id: Public driver number
        license_number: Driver's license number
        vehicle: The vehicle the driver operates
        ratings: Ratings received, oldest first
        total_rides: Number of completed rides
        available_for_rides: Whether the driver takes new rides
        earnings: Sum of final prices of completed rides
        current_location: Last reported coordinates
    """

    ROLE = UserRole.DRIVER

    def __init__(self, id: str, first_name: str, last_name: str, email: str,
                 contact: Optional[Contact], driver_id: str, license_number: str,
                 vehicle: Vehicle, **kwargs):
        super().__init__(id, first_name, last_name, email, contact, **kwargs)
        self._driver_id = driver_id
        self._license_number = license_number
        self._vehicle = vehicle
        self._ratings: List[Rating] = []
        self._total_rides = 0
        self._available_for_rides = True
        self._earnings = 0.0
        self._current_location: Optional[GeoPoint] = None

    @property
    def driver_id(self) -> str:
        return self._driver_id

    @property
    def license_number(self) -> str:
        return self._license_number

    @property
    def vehicle(self) -> Vehicle:
        return self._vehicle

    @property
    def ratings(self) -> List[Rating]:
        return list(self._ratings)

    @property
    def average_rating(self) -> float:
        return average_rating(self._ratings)

    @property
    def total_rides(self) -> int:
        return self._total_rides

    @property
    def is_available(self) -> bool:
        return self._available_for_rides

    @property
    def earnings(self) -> float:
        return self._earnings

    @property
    def current_location(self) -> Optional[GeoPoint]:
        return self._current_location

    def add_rating(self, rating: Rating) -> None:
        self._ratings.append(rating)

    def record_completed_ride(self, final_price: float) -> None:
        """Count a completed ride and add its final price to the earnings."""
        if final_price < 0:
            raise InvalidArgumentError("final_price", "must not be negative")
        self._total_rides += 1
        self._earnings += final_price

    def set_availability(self, available: bool) -> None:
        self._available_for_rides = bool(available)

    def update_location(self, latitude: float, longitude: float) -> None:
        self._current_location = GeoPoint(latitude, longitude)

    def update_vehicle(self, vehicle: Vehicle) -> None:
        self._vehicle = vehicle

    def get_permissions(self) -> List[str]:
        return list(DRIVER_PERMISSIONS)

    def get_display_info(self) -> Dict[str, Any]:
        info = self._base_display_info()
        info["averageRating"] = self.average_rating
        info["isAvailable"] = self._available_for_rides
        return info

    def to_record(self) -> Dict[str, Any]:
        record = super().to_record()
        record.update({
            "driverId": self._driver_id,
            "licenseNumber": self._license_number,
            "vehicle": self._vehicle.to_record(),
            "ratings": [r.to_record() for r in self._ratings],
            "totalRides": self._total_rides,
            "availableForRides": self._available_for_rides,
            "earnings": self._earnings,
            "currentLocation": (self._current_location.to_record()
                                if self._current_location else None),
        })
        return record

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Driver":
        driver = cls(
            driver_id=record.get("driverId", ""),
            license_number=record.get("licenseNumber", ""),
            vehicle=Vehicle.from_record(record.get("vehicle") or {}),
            **cls._base_kwargs(record),
        )
        driver._ratings = [Rating.from_record(r) for r in record.get("ratings", [])]
        driver._total_rides = int(record.get("totalRides", 0))
        driver._available_for_rides = bool(record.get("availableForRides", True))
        driver._earnings = float(record.get("earnings", 0))
        driver._current_location = GeoPoint.from_record(record.get("currentLocation"))
        return driver
