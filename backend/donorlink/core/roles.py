from enum import Enum
from typing import Optional


class UserRole(str, Enum):
    DONOR = "donor"
    HOSPITAL = "hospital"
    AGENT = "agent"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value) -> Optional["UserRole"]:
        """Read a stored role value; unknown or empty values give None.

        Older profile rows store donors as ``user``.
        """
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        value = str(value).strip().lower()
        if value == "user":
            return cls.DONOR
        try:
            return cls(value)
        except ValueError:
            return None


ALL_ROLES = frozenset(UserRole)

BLOOD_GROUPS = ("A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-")
