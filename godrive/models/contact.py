"""Contact details for GoDrive users."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Address:
    """
    A postal address.

    Attributes:
        street: Street and number
        city: City name
        country: Country name
        zip_code: Postal or zip code
        latitude: Optional latitude coordinate
        longitude: Optional longitude coordinate
    """
    street: str = ""
    city: str = ""
    country: str = ""
    zip_code: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def full_address(self) -> str:
        """Get the full formatted address."""
        parts = [self.street, self.city, self.zip_code, self.country]
        return ", ".join(part for part in parts if part)

    def to_record(self) -> Dict[str, Any]:
        record = {
            "street": self.street,
            "city": self.city,
            "country": self.country,
            "zipCode": self.zip_code,
        }
        if self.latitude is not None:
            record["latitude"] = self.latitude
        if self.longitude is not None:
            record["longitude"] = self.longitude
        return record

    @classmethod
    def from_record(cls, data: Optional[Dict[str, Any]]) -> "Address":
        data = data or {}
        return cls(
            street=data.get("street", ""),
            city=data.get("city", ""),
            country=data.get("country", ""),
            zip_code=data.get("zipCode", ""),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
        )


@dataclass(frozen=True)
class Contact:
    """How to reach a user."""
    email: str = ""
    phone: str = ""
    address: Address = field(default_factory=Address)

    def to_record(self) -> Dict[str, Any]:
        return {
            "email": self.email,
            "phone": self.phone,
            "address": self.address.to_record(),
        }

    @classmethod
    def from_record(cls, data: Optional[Dict[str, Any]]) -> "Contact":
        data = data or {}
        return cls(
            email=data.get("email", ""),
            phone=data.get("phone", ""),
            address=Address.from_record(data.get("address")),
        )
