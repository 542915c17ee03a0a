"""Passenger entity for the GoDrive application."""

import logging
from typing import Any, Dict, List, Optional

from godrive.errors import InvalidArgumentError
from godrive.models.contact import Contact
from godrive.models.location import GeoPoint
from godrive.models.payment import Payment
from godrive.models.rating import Rating, average_rating
from godrive.models.user import User, UserRole

logger = logging.getLogger(__name__)

PASSENGER_PERMISSIONS = [
    "request_ride",
    "view_available_drivers",
    "rate_driver",
    "view_ride_history",
    "add_funds",
    "manage_payment_methods",
    "save_favorite_drivers",
]


class Passenger(User):
    """
    Represents a passenger in the ride-hailing system.

    Attributes:
        passenger_id: Public passenger number
        ratings: Ratings received from drivers
        rides_count: Number of completed rides
        favorite_drivers: IDs of favorite drivers, without duplicates
        payment_history: Payments made, oldest first
        wallet_balance: Prepaid balance used by WALLET payments
        current_location: Last reported coordinates
    """

    ROLE = UserRole.PASSENGER

    def __init__(self, id: str, first_name: str, last_name: str, email: str,
                 contact: Optional[Contact], passenger_id: str, **kwargs):
        super().__init__(id, first_name, last_name, email, contact, **kwargs)
        self._passenger_id = passenger_id
        self._ratings: List[Rating] = []
        self._rides_count = 0
        self._favorite_drivers: List[str] = []
        self._payment_history: List[Payment] = []
        self._wallet_balance = 0.0
        self._current_location: Optional[GeoPoint] = None

    @property
    def passenger_id(self) -> str:
        return self._passenger_id

    @property
    def ratings(self) -> List[Rating]:
        return list(self._ratings)

    @property
    def average_rating(self) -> float:
        return average_rating(self._ratings)

    @property
    def rides_count(self) -> int:
        return self._rides_count

    @property
    def favorite_drivers(self) -> List[str]:
        return list(self._favorite_drivers)

    @property
    def payment_history(self) -> List[Payment]:
        return list(self._payment_history)

    @property
    def wallet_balance(self) -> float:
        return self._wallet_balance

    @property
    def current_location(self) -> Optional[GeoPoint]:
        return self._current_location

    def add_rating(self, rating: Rating) -> None:
        self._ratings.append(rating)

    def increment_rides(self) -> None:
        self._rides_count += 1

    def add_favorite_driver(self, driver_id: str) -> None:
        """Add a favorite driver; adding one twice keeps a single entry."""
        if driver_id not in self._favorite_drivers:
            self._favorite_drivers.append(driver_id)

    def remove_favorite_driver(self, driver_id: str) -> None:
        self._favorite_drivers = [d for d in self._favorite_drivers if d != driver_id]

    def add_payment(self, payment: Payment) -> None:
        """
        Record a payment, debiting the wallet for WALLET payments.

        The wallet is not floored at zero: a WALLET payment larger than the
        balance leaves it negative.
        """
        self._payment_history.append(payment)
        if payment.is_wallet:
            self._wallet_balance -= payment.amount
            if self._wallet_balance < 0:
                logger.warning(f"Wallet of passenger {self.id} is negative: {self._wallet_balance}")

    def add_funds(self, amount: float) -> None:
        """Top up the wallet. Raises InvalidArgumentError unless amount > 0."""
        if amount is None or amount <= 0:
            raise InvalidArgumentError("amount", "must be greater than 0")
        self._wallet_balance += amount

    def update_location(self, latitude: float, longitude: float) -> None:
        self._current_location = GeoPoint(latitude, longitude)

    def get_permissions(self) -> List[str]:
        return list(PASSENGER_PERMISSIONS)

    def get_display_info(self) -> Dict[str, Any]:
        info = self._base_display_info()
        info["averageRating"] = self.average_rating
        info["favoriteDriversCount"] = len(self._favorite_drivers)
        return info

    def to_record(self) -> Dict[str, Any]:
        record = super().to_record()
        record.update({
            "passengerId": self._passenger_id,
            "ratings": [r.to_record() for r in self._ratings],
            "ridesCount": self._rides_count,
            "favoriteDrivers": list(self._favorite_drivers),
            "paymentHistory": [p.to_record() for p in self._payment_history],
            "walletBalance": self._wallet_balance,
            "currentLocation": (self._current_location.to_record()
                                if self._current_location else None),
        })
        return record

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Passenger":
        passenger = cls(passenger_id=record.get("passengerId", ""), **cls._base_kwargs(record))
        passenger._ratings = [Rating.from_record(r) for r in record.get("ratings", [])]
        passenger._rides_count = int(record.get("ridesCount", 0))
        passenger._favorite_drivers = list(dict.fromkeys(record.get("favoriteDrivers", [])))
        passenger._payment_history = [
            Payment.from_record(p) for p in record.get("paymentHistory", [])
        ]
        passenger._wallet_balance = float(record.get("walletBalance", 0))
        passenger._current_location = GeoPoint.from_record(record.get("currentLocation"))
        return passenger
