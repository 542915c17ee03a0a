"""Rating value object for the GoDrive application."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable

from godrive.errors import InvalidArgumentError
from godrive.models.timestamps import format_timestamp, parse_timestamp

MIN_RATING = 1
MAX_RATING = 5


@dataclass(frozen=True)
class Rating:
    """
    A rating left for a user after a ride.

    Attributes:
        ride_id: ID of the rated ride
        rating: Score between 1 and 5
        comment: Free text comment
        date: When the rating was left
    """
    ride_id: str
    rating: float
    comment: str = ""
    date: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if not MIN_RATING <= self.rating <= MAX_RATING:
            raise InvalidArgumentError(
                "rating", f"must be between {MIN_RATING} and {MAX_RATING}")

    def to_record(self) -> Dict[str, Any]:
        return {
            "rideId": self.ride_id,
            "rating": self.rating,
            "comment": self.comment,
            "date": format_timestamp(self.date),
        }

    @classmethod
    def from_record(cls, data: Dict[str, Any]) -> "Rating":
        return cls(
            ride_id=data.get("rideId", ""),
            rating=data["rating"],
            comment=data.get("comment", ""),
            date=parse_timestamp(data.get("date")) or datetime.now(),
        )


def average_rating(ratings: Iterable[Rating]) -> float:
    """Mean of the rating values rounded to 2 decimals, or 0 when empty."""
    values = [r.rating for r in ratings]
    if not values:
        return 0
    return round(sum(values) / len(values), 2)
