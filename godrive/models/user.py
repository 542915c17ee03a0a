"""User base type and role registry for the GoDrive application."""

import re
from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from godrive.errors import InvalidArgumentError
from godrive.models.contact import Contact
from godrive.models.timestamps import format_timestamp, parse_timestamp

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^\+?[\d\s\-()]+$")


class UserRole(Enum):
    """Roles a user can hold in the system."""
    DRIVER = "DRIVER"
    PASSENGER = "PASSENGER"
    ADMINISTRATOR = "ADMINISTRATOR"


def validate_email(email: str) -> str:
    """Return *email* unchanged if it looks like an address, else raise."""
    if not isinstance(email, str) or not EMAIL_PATTERN.match(email):
        raise InvalidArgumentError("email", f"'{email}' is not a valid email address")
    return email


def validate_phone(phone: str) -> str:
    """Return *phone* unchanged if empty or phone-like, else raise."""
    if phone and (not isinstance(phone, str) or not PHONE_PATTERN.match(phone)):
        raise InvalidArgumentError("phone", f"'{phone}' is not a valid phone number")
    return phone


class User(ABC):
    """
    Common state of every user in the ride-hailing system.

    Concrete roles subclass this and declare ``ROLE``; the role of an
    instance is fixed by its class and never changes. Composite values are
    immutable value objects and list getters return copies, so callers
    cannot alter a user except through its methods.

    Attributes:
        id: Unique identifier for the user
        first_name: User's first name
        last_name: User's last name
        email: User's email address
        contact: Email, phone and postal address
        created_at: When the user account was created
        is_active: Whether the user account is active
        profile_photo: Optional URL of a profile photo
    """

    ROLE: UserRole = None
    _registry: Dict[UserRole, type] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.ROLE is not None:
            User._registry[cls.ROLE] = cls

    def __init__(self, id: str, first_name: str, last_name: str, email: str,
                 contact: Optional[Contact] = None, created_at: Optional[datetime] = None,
                 is_active: bool = True, profile_photo: Optional[str] = None):
        if not id:
            raise InvalidArgumentError("id", "must not be empty")
        self._id = str(id)
        self._first_name = first_name
        self._last_name = last_name
        self._email = validate_email(email)
        self._contact = contact or Contact(email=email)
        validate_phone(self._contact.phone)
        self._created_at = created_at or datetime.now()
        self._is_active = is_active
        self._profile_photo = profile_photo

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._id} {self.full_name!r}>"

    @property
    def id(self) -> str:
        return self._id

    @property
    def role(self) -> UserRole:
        return self.ROLE

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def full_name(self) -> str:
        """Get the user's full name."""
        return f"{self._first_name} {self._last_name}"

    @property
    def email(self) -> str:
        return self._email

    @property
    def contact(self) -> Contact:
        return self._contact

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def profile_photo(self) -> Optional[str]:
        return self._profile_photo

    def set_email(self, email: str) -> None:
        """Change the email address after validating it, in the contact too."""
        self._email = validate_email(email)
        self._contact = replace(self._contact, email=email)

    def set_contact(self, contact: Contact) -> None:
        validate_phone(contact.phone)
        self._contact = contact

    def activate(self) -> None:
        self._is_active = True

    def deactivate(self) -> None:
        self._is_active = False

    def set_profile_photo(self, url: str) -> None:
        self._profile_photo = url

    @abstractmethod
    def get_permissions(self) -> List[str]:
        """Get the permission names granted to this user."""

    @abstractmethod
    def get_display_info(self) -> Dict[str, Any]:
        """Get a display-safe projection of this user."""

    def _base_display_info(self) -> Dict[str, Any]:
        info = self.to_record()
        info["fullName"] = self.full_name
        info["permissions"] = len(self.get_permissions())
        return info

    def to_record(self) -> Dict[str, Any]:
        """Serialize the user into its persisted record shape."""
        record = {
            "id": self._id,
            "firstName": self._first_name,
            "lastName": self._last_name,
            "email": self._email,
            "contact": self._contact.to_record(),
            "role": self.ROLE.value,
            "createdAt": format_timestamp(self._created_at),
            "isActive": self._is_active,
        }
        if self._profile_photo is not None:
            record["profilePhoto"] = self._profile_photo
        return record

    @staticmethod
    def _base_kwargs(record: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": record["id"],
            "first_name": record.get("firstName", ""),
            "last_name": record.get("lastName", ""),
            "email": record["email"],
            "contact": Contact.from_record(record.get("contact")),
            "created_at": parse_timestamp(record.get("createdAt")),
            "is_active": record.get("isActive", True),
            "profile_photo": record.get("profilePhoto"),
        }

    @classmethod
    @abstractmethod
    def from_record(cls, record: Dict[str, Any]) -> "User":
        """Rebuild a user from its persisted record."""


def user_from_record(record: Dict[str, Any]) -> User:
    """
    Rebuild the right User subclass from a persisted record.

    Args:
        record: User record with a ``role`` field

    Returns:
        User: A Driver, Passenger or Administrator

    Raises:
        InvalidArgumentError: If the role is missing or unknown
    """
    try:
        role = UserRole(record.get("role"))
    except ValueError:
        raise InvalidArgumentError("role", f"unknown role {record.get('role')!r}")
    return User._registry[role].from_record(record)
