"""Administrator entity for the GoDrive application."""

from typing import Any, Dict, List, Optional

from godrive.errors import InvalidArgumentError
from godrive.models.contact import Contact
from godrive.models.user import User, UserRole

MIN_ACCESS_LEVEL = 1
MAX_ACCESS_LEVEL = 5
EXTENDED_ACCESS_LEVEL = 3

BASE_PERMISSIONS = [
    "view_all_users",
    "view_all_rides",
    "manage_drivers",
    "manage_passengers",
    "view_reports",
    "handle_disputes",
]

EXTENDED_PERMISSIONS = [
    "manage_admins",
    "system_settings",
    "financial_reports",
    "ban_users",
    "full_access",
]


def _check_access_level(level: int) -> int:
    if isinstance(level, bool) or not isinstance(level, int) \
            or not MIN_ACCESS_LEVEL <= level <= MAX_ACCESS_LEVEL:
        raise InvalidArgumentError(
            "access_level", f"must be between {MIN_ACCESS_LEVEL} and {MAX_ACCESS_LEVEL}")
    return level


class Administrator(User):
    """
    An operator of the platform.

    Permissions are derived from ``access_level``; level 3 and above adds
    the extended permission list.
    """

    ROLE = UserRole.ADMINISTRATOR

    def __init__(self, id: str, first_name: str, last_name: str, email: str,
                 contact: Optional[Contact], admin_id: str, department: str,
                 access_level: int = 2, **kwargs):
        super().__init__(id, first_name, last_name, email, contact, **kwargs)
        self._admin_id = admin_id
        self._department = department
        self._access_level = _check_access_level(access_level)
        self._managed_cities: List[str] = []

    @property
    def admin_id(self) -> str:
        return self._admin_id

    @property
    def department(self) -> str:
        return self._department

    @property
    def access_level(self) -> int:
        return self._access_level

    @property
    def managed_cities(self) -> List[str]:
        return list(self._managed_cities)

    def set_access_level(self, level: int) -> None:
        self._access_level = _check_access_level(level)

    def add_managed_city(self, city: str) -> None:
        if city not in self._managed_cities:
            self._managed_cities.append(city)

    def remove_managed_city(self, city: str) -> None:
        self._managed_cities = [c for c in self._managed_cities if c != city]

    def get_permissions(self) -> List[str]:
        if self._access_level >= EXTENDED_ACCESS_LEVEL:
            return BASE_PERMISSIONS + EXTENDED_PERMISSIONS
        return list(BASE_PERMISSIONS)

    def get_display_info(self) -> Dict[str, Any]:
        return self._base_display_info()

    def to_record(self) -> Dict[str, Any]:
        record = super().to_record()
        record.update({
            "adminId": self._admin_id,
            "department": self._department,
            "accessLevel": self._access_level,
            "managedCities": list(self._managed_cities),
        })
        return record

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Administrator":
        admin = cls(
            admin_id=record.get("adminId", ""),
            department=record.get("department", ""),
            access_level=int(record.get("accessLevel", 2)),
            **cls._base_kwargs(record),
        )
        admin._managed_cities = list(dict.fromkeys(record.get("managedCities", [])))
        return admin
