"""Turn JSON request bodies into GoDrive value objects."""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional
from uuid import uuid4

from godrive.errors import InvalidArgumentError
from godrive.models import (
    Contact, Payment, PaymentMethod, Rating, RideLocation, Vehicle,
)
from godrive.models.timestamps import parse_timestamp


class MissingFieldsError(InvalidArgumentError):
    """The request body lacks required fields."""

    def __init__(self, required: List[str], missing: List[str]):
        self.required = required
        self.missing = missing
        super().__init__("body", f"missing required fields: {', '.join(missing)}")


def require_fields(payload: Dict[str, Any], fields: Iterable[str]) -> None:
    """Raise MissingFieldsError unless every field is present and not empty."""
    fields = list(fields)
    missing = [f for f in fields if payload.get(f) in (None, "")]
    if missing:
        raise MissingFieldsError(fields, missing)


def entity_id(payload: Dict[str, Any]) -> str:
    """Use the id from the payload, or generate one."""
    return str(payload.get("id") or uuid4())


def number(payload: Dict[str, Any], field: str, default: Optional[float] = None) -> float:
    value = payload.get(field, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgumentError(field, "must be a number")
    return value


def boolean(payload: Dict[str, Any], field: str) -> bool:
    value = payload.get(field)
    if not isinstance(value, bool):
        raise InvalidArgumentError(field, "must be a boolean")
    return value


def parse_contact(payload: Dict[str, Any]) -> Contact:
    data = payload.get("contact")
    if data is None:
        return Contact(email=payload.get("email", ""))
    if not isinstance(data, dict):
        raise InvalidArgumentError("contact", "must be an object")
    _check_strings(data, "contact", ["email", "phone"])
    address = data.get("address")
    if address is not None:
        if not isinstance(address, dict):
            raise InvalidArgumentError("contact.address", "must be an object")
        _check_strings(address, "contact.address", ["street", "city", "country", "zipCode"])
        for field in ("latitude", "longitude"):
            if address.get(field) is not None:
                number(address, field)
    return Contact.from_record(data)


def _check_strings(data: Dict[str, Any], prefix: str, fields: Iterable[str]) -> None:
    for field in fields:
        if data.get(field) is not None and not isinstance(data[field], str):
            raise InvalidArgumentError(f"{prefix}.{field}", "must be a string")


def parse_vehicle(data: Any) -> Vehicle:
    if not isinstance(data, dict):
        raise InvalidArgumentError("vehicle", "must be an object")
    try:
        return Vehicle.from_record(data)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError("vehicle", str(e))


def parse_ride_location(data: Any, field: str) -> RideLocation:
    if not isinstance(data, dict) or "address" not in data:
        raise InvalidArgumentError(field, "must be an object with address, latitude and longitude")
    try:
        return RideLocation.from_record(data)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(field, str(e))


def parse_payment(data: Any) -> Payment:
    if not isinstance(data, dict):
        raise InvalidArgumentError("payment", "must be an object")
    require_fields(data, ["amount", "method"])
    try:
        method = PaymentMethod(data["method"])
    except ValueError:
        allowed = ", ".join(m.value for m in PaymentMethod)
        raise InvalidArgumentError("payment.method", f"must be one of {allowed}")
    try:
        date = parse_timestamp(data.get("date")) or datetime.now()
    except (TypeError, ValueError):
        raise InvalidArgumentError("payment.date", "must be an ISO-8601 timestamp")
    return Payment(
        amount=number(data, "amount"),
        method=method,
        currency=data.get("currency") or "COP",
        date=date,
    )


def parse_rating(payload: Dict[str, Any]) -> Rating:
    require_fields(payload, ["rideId", "rating"])
    return Rating(
        ride_id=str(payload["rideId"]),
        rating=number(payload, "rating"),
        comment=payload.get("comment", ""),
    )
