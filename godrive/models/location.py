"""Location value objects for the GoDrive application."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class GeoPoint:
    """
    A latitude/longitude pair.

    Coordinates are stored as given and never used for computation.
    """
    latitude: float
    longitude: float

    @property
    def coordinates(self) -> tuple:
        """Get the coordinates as a tuple."""
        return (self.latitude, self.longitude)

    def to_record(self) -> Dict[str, Any]:
        return {"latitude": self.latitude, "longitude": self.longitude}

    @classmethod
    def from_record(cls, data: Optional[Dict[str, Any]]) -> Optional["GeoPoint"]:
        if not data:
            return None
        return cls(latitude=float(data["latitude"]), longitude=float(data["longitude"]))


@dataclass(frozen=True)
class RideLocation:
    """
    The origin or destination of a ride.

    Attributes:
        address: Human readable address
        latitude: Latitude coordinate
        longitude: Longitude coordinate
    """
    address: str
    latitude: float
    longitude: float

    @property
    def coordinates(self) -> tuple:
        """Get the coordinates as a tuple."""
        return (self.latitude, self.longitude)

    def to_record(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }

    @classmethod
    def from_record(cls, data: Dict[str, Any]) -> "RideLocation":
        return cls(
            address=data.get("address", ""),
            latitude=float(data.get("latitude", 0)),
            longitude=float(data.get("longitude", 0)),
        )
