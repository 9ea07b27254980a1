import logging
from enum import Enum
from typing import List, Optional

from sqlalchemy.orm import Session

from donorlink.core.proximity import Candidate, GeoPoint
from donorlink.core.roles import UserRole
from donorlink.models.blood_bank import BloodBank
from donorlink.models.user import User

logger = logging.getLogger(__name__)


class CandidateKind(str, Enum):
    DONOR = "donor"
    HOSPITAL = "hospital"
    BLOOD_BANK = "blood_bank"


# profile rows written before donors had their own role value
_DONOR_ROLE_VALUES = (UserRole.DONOR.value, "user")


def profile_to_candidate(user: User, kind: CandidateKind) -> Candidate:
    return Candidate(
        id=str(user.id),
        kind=kind.value,
        display_name=user.full_name or "",
        location=GeoPoint.from_pair(user.latitude, user.longitude),
        blood_group=user.blood_group,
        is_available=bool(user.is_available),
        address=user.location_address,
        raw={
            "phone_number": user.phone_number,
            "is_verified": user.is_verified,
        },
    )


def bank_to_candidate(bank: BloodBank) -> Candidate:
    return Candidate(
        id=str(bank.id),
        kind=CandidateKind.BLOOD_BANK.value,
        display_name=bank.name,
        location=GeoPoint.from_pair(bank.latitude, bank.longitude),
        is_available=bool(bank.is_active),
        address=bank.address,
        stocked_groups=tuple(bank.available_blood_types or ()),
        raw={
            "contact_number": bank.contact_number,
            "operating_hours": bank.operating_hours,
        },
    )


class CandidateStore:
    """Reads a snapshot of searchable records; nothing here is live."""

    def __init__(self, db: Session):
        self.db = db

    def list_candidates(
        self,
        kind: CandidateKind,
        blood_group: Optional[str] = None,
        available_only: bool = False,
    ) -> List[Candidate]:
        if kind == CandidateKind.BLOOD_BANK:
            banks = (
                self.db.query(BloodBank)
                .filter(BloodBank.is_active.is_(True))
                .order_by(BloodBank.name)
                .all()
            )
            return [bank_to_candidate(bank) for bank in banks]

        query = self.db.query(User)
        if kind == CandidateKind.DONOR:
            query = query.filter(User.role.in_(_DONOR_ROLE_VALUES))
            if blood_group:
                query = query.filter(User.blood_group == blood_group)
            if available_only:
                query = query.filter(User.is_available.is_(True))
        else:
            query = query.filter(User.role == UserRole.HOSPITAL.value)

        rows = query.order_by(User.full_name).all()
        logger.debug("Loaded %d %s candidates", len(rows), kind.value)
        return [profile_to_candidate(row, kind) for row in rows]
