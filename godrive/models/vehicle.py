"""Vehicle value object for the GoDrive application."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class VehicleType(Enum):
    """Types of vehicles available in the system."""
    SEDAN = "SEDAN"
    SUV = "SUV"
    HATCHBACK = "HATCHBACK"
    VAN = "VAN"
    MOTORCYCLE = "MOTORCYCLE"


@dataclass(frozen=True)
class Vehicle:
    """
    The vehicle a driver operates.

    Attributes:
        plate: License plate
        brand: Vehicle manufacturer
        model: Vehicle model
        year: Vehicle year
        color: Vehicle color
        type: Type of vehicle
    """
    plate: str
    brand: str
    model: str
    year: int
    color: str
    type: VehicleType = VehicleType.SEDAN

    @property
    def description(self) -> str:
        """Get a short description, e.g. "Mazda 3 (ABC123)"."""
        return f"{self.brand} {self.model} ({self.plate})"

    def to_record(self) -> Dict[str, Any]:
        return {
            "plate": self.plate,
            "brand": self.brand,
            "model": self.model,
            "year": self.year,
            "color": self.color,
            "type": self.type.value,
        }

    @classmethod
    def from_record(cls, data: Dict[str, Any]) -> "Vehicle":
        return cls(
            plate=data.get("plate", ""),
            brand=data.get("brand", ""),
            model=data.get("model", ""),
            year=int(data.get("year", 0)),
            color=data.get("color", ""),
            type=VehicleType(data.get("type", VehicleType.SEDAN.value)),
        )
