import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from donorlink.core.roles import UserRole
from donorlink.models.user import User

logger = logging.getLogger(__name__)

# Fields a user may change on their own profile. Role is not one of them.
EDITABLE_FIELDS = frozenset({
    "full_name",
    "phone_number",
    "blood_group",
    "is_available",
    "location_address",
    "latitude",
    "longitude",
})


class ProfileUpdateError(ValueError):
    pass


class ProfileStore:
    def __init__(self, db: Session):
        self.db = db

    def _commit(self, user: User) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(user)

    def fetch_profile(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def update_profile(self, user_id: str, fields: dict) -> User:
        """Apply a partial update. Unknown fields and ``role`` are refused."""
        # address is accepted as an alias of the stored column
        if "address" in fields:
            fields = dict(fields)
            fields["location_address"] = fields.pop("address")

        refused = set(fields) - EDITABLE_FIELDS
        if refused:
            raise ProfileUpdateError(f"Fields not editable: {', '.join(sorted(refused))}")

        if ("latitude" in fields) != ("longitude" in fields):
            raise ProfileUpdateError("latitude and longitude must be updated together")

        user = self.fetch_profile(user_id)
        if user is None:
            raise LookupError(user_id)

        for name, value in fields.items():
            setattr(user, name, value)
        self._commit(user)
        logger.info("Updated profile %s: %s", user_id, ", ".join(sorted(fields)))
        return user

    def set_role(self, user_id: str, role: UserRole) -> User:
        user = self.fetch_profile(user_id)
        if user is None:
            raise LookupError(user_id)
        user.role = role.value
        self._commit(user)
        logger.info("Role of %s set to %s", user_id, role.value)
        return user
