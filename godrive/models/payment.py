"""Payment value object for the GoDrive application."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from godrive.errors import InvalidArgumentError
from godrive.models.timestamps import format_timestamp, parse_timestamp


class PaymentMethod(Enum):
    """Ways a passenger can pay for a ride."""
    CASH = "CASH"
    CARD = "CARD"
    WALLET = "WALLET"
    TRANSFER = "TRANSFER"


@dataclass(frozen=True)
class Payment:
    """
    A payment made for a ride.

    Attributes:
        amount: Amount paid
        method: Payment method used
        currency: ISO currency code, e.g. "COP"
        date: When the payment was made
    """
    amount: float
    method: PaymentMethod
    currency: str = "COP"
    date: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if self.amount is None or self.amount <= 0:
            raise InvalidArgumentError("amount", "must be greater than 0")

    @property
    def is_wallet(self) -> bool:
        """Check if the payment is charged to the passenger wallet."""
        return self.method == PaymentMethod.WALLET

    def to_record(self) -> Dict[str, Any]:
        return {
            "amount": self.amount,
            "method": self.method.value,
            "currency": self.currency,
            "date": format_timestamp(self.date),
        }

    @classmethod
    def from_record(cls, data: Optional[Dict[str, Any]]) -> Optional["Payment"]:
        if not data:
            return None
        return cls(
            amount=float(data["amount"]),
            method=PaymentMethod(data["method"]),
            currency=data.get("currency", "COP"),
            date=parse_timestamp(data.get("date")) or datetime.now(),
        )
