"""Ride entity and lifecycle rules for the GoDrive application."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from godrive.errors import InvalidArgumentError, InvalidTransitionError
from godrive.models.location import RideLocation
from godrive.models.payment import Payment
from godrive.models.timestamps import format_timestamp, parse_timestamp


class RideStatus(Enum):
    """Possible statuses for a ride."""
    REQUESTED = "REQUESTED"
    ACCEPTED = "ACCEPTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


# Maps current status -> statuses it may move to
RIDE_TRANSITIONS = {
    RideStatus.REQUESTED: {RideStatus.ACCEPTED, RideStatus.CANCELLED},
    RideStatus.ACCEPTED: {RideStatus.IN_PROGRESS, RideStatus.CANCELLED},
    RideStatus.IN_PROGRESS: {RideStatus.COMPLETED, RideStatus.CANCELLED},
    RideStatus.COMPLETED: set(),
    RideStatus.CANCELLED: set(),
}

TERMINAL_STATUSES = frozenset(s for s, nxt in RIDE_TRANSITIONS.items() if not nxt)


class Ride:
    """
    Represents a ride in the ride-hailing system.

    Status and driver only change through ``accept_ride``, ``start_ride``,
    ``complete_ride`` and ``cancel_ride``. A rejected transition raises
    InvalidTransitionError and leaves the ride untouched.

    Attributes:
        id: Unique identifier for the ride
        passenger_id: ID of the passenger requesting the ride
        driver_id: ID of the driver who accepted the ride
        origin: Pickup location
        destination: Dropoff location
        status: Current status of the ride
        requested_price: Price offered by the passenger
        final_price: Price charged on completion
        distance: Distance of the ride in kilometers
        estimated_duration: Estimated duration in minutes
        payment: Payment recorded on completion
        created_at: When the ride was requested
        started_at: When the ride started
        completed_at: When the ride was completed
        notes: Cancellation reason or other notes
    """

    def __init__(self, id: str, passenger_id: str, origin: RideLocation,
                 destination: RideLocation, requested_price: float,
                 distance: float = 0, estimated_duration: float = 0,
                 created_at: Optional[datetime] = None):
        if not id:
            raise InvalidArgumentError("id", "must not be empty")
        if requested_price is None or requested_price < 0:
            raise InvalidArgumentError("requested_price", "must not be negative")
        self._id = str(id)
        self._passenger_id = passenger_id
        self._driver_id: Optional[str] = None
        self._origin = origin
        self._destination = destination
        self._status = RideStatus.REQUESTED
        self._requested_price = requested_price
        self._final_price: Optional[float] = None
        self._distance = distance
        self._estimated_duration = estimated_duration
        self._payment: Optional[Payment] = None
        self._created_at = created_at or datetime.now()
        self._started_at: Optional[datetime] = None
        self._completed_at: Optional[datetime] = None
        self._notes: Optional[str] = None

    def __repr__(self) -> str:
        return f"<Ride {self._id} {self._status.value}>"

    @property
    def id(self) -> str:
        return self._id

    @property
    def passenger_id(self) -> str:
        return self._passenger_id

    @property
    def driver_id(self) -> Optional[str]:
        return self._driver_id

    @property
    def origin(self) -> RideLocation:
        return self._origin

    @property
    def destination(self) -> RideLocation:
        return self._destination

    @property
    def status(self) -> RideStatus:
        return self._status

    @property
    def requested_price(self) -> float:
        return self._requested_price

    @property
    def final_price(self) -> Optional[float]:
        return self._final_price

    @property
    def distance(self) -> float:
        return self._distance

    @property
    def estimated_duration(self) -> float:
        return self._estimated_duration

    @property
    def payment(self) -> Optional[Payment]:
        return self._payment

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def started_at(self) -> Optional[datetime]:
        return self._started_at

    @property
    def completed_at(self) -> Optional[datetime]:
        return self._completed_at

    @property
    def notes(self) -> Optional[str]:
        return self._notes

    @property
    def is_terminal(self) -> bool:
        return self._status in TERMINAL_STATUSES

    def can_transition_to(self, status: RideStatus) -> bool:
        return status in RIDE_TRANSITIONS[self._status]

    def _require_transition(self, status: RideStatus, action: str) -> None:
        if not self.can_transition_to(status):
            raise InvalidTransitionError(self._status, action)

    def accept_ride(self, driver_id: str) -> None:
        """Bind *driver_id* and move REQUESTED -> ACCEPTED."""
        self._require_transition(RideStatus.ACCEPTED, "accept")
        if not driver_id:
            raise InvalidArgumentError("driver_id", "must not be empty")
        self._driver_id = driver_id
        self._status = RideStatus.ACCEPTED

    def start_ride(self) -> None:
        """Move ACCEPTED -> IN_PROGRESS and stamp ``started_at``."""
        self._require_transition(RideStatus.IN_PROGRESS, "start")
        self._status = RideStatus.IN_PROGRESS
        self._started_at = datetime.now()

    def complete_ride(self, final_price: float, payment: Payment) -> None:
        """Move IN_PROGRESS -> COMPLETED, recording price and payment."""
        self._require_transition(RideStatus.COMPLETED, "complete")
        if final_price is None or final_price < 0:
            raise InvalidArgumentError("final_price", "must not be negative")
        if payment is None:
            raise InvalidArgumentError("payment", "is required")
        self._status = RideStatus.COMPLETED
        self._final_price = final_price
        self._payment = payment
        self._completed_at = datetime.now()

    def cancel_ride(self, reason: Optional[str] = None) -> None:
        """Cancel a ride that is not yet finished, keeping driver and price data."""
        self._require_transition(RideStatus.CANCELLED, "cancel")
        self._status = RideStatus.CANCELLED
        self._notes = reason

    def set_notes(self, notes: str) -> None:
        self._notes = notes

    def get_display_info(self) -> Dict[str, Any]:
        return self.to_record()

    def to_record(self) -> Dict[str, Any]:
        """Serialize the ride into its persisted record shape."""
        return {
            "id": self._id,
            "passengerId": self._passenger_id,
            "driverId": self._driver_id,
            "origin": self._origin.to_record(),
            "destination": self._destination.to_record(),
            "status": self._status.value,
            "requestedPrice": self._requested_price,
            "finalPrice": self._final_price,
            "distance": self._distance,
            "estimatedDuration": self._estimated_duration,
            "payment": self._payment.to_record() if self._payment else None,
            "createdAt": format_timestamp(self._created_at),
            "startedAt": format_timestamp(self._started_at),
            "completedAt": format_timestamp(self._completed_at),
            "notes": self._notes,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Ride":
        """Rebuild a ride from its persisted record."""
        ride = cls(
            id=record["id"],
            passenger_id=record["passengerId"],
            origin=RideLocation.from_record(record.get("origin") or {}),
            destination=RideLocation.from_record(record.get("destination") or {}),
            requested_price=record.get("requestedPrice", 0),
            distance=record.get("distance", 0),
            estimated_duration=record.get("estimatedDuration", 0),
            created_at=parse_timestamp(record.get("createdAt")),
        )
        ride._driver_id = record.get("driverId")
        ride._status = RideStatus(record.get("status", RideStatus.REQUESTED.value))
        ride._final_price = record.get("finalPrice")
        ride._payment = Payment.from_record(record.get("payment"))
        ride._started_at = parse_timestamp(record.get("startedAt"))
        ride._completed_at = parse_timestamp(record.get("completedAt"))
        ride._notes = record.get("notes")
        return ride
