
from sqlalchemy import Boolean, Column, Float, JSON, String
import uuid
from donorlink.database import Base


class BloodBank(Base):
    __tablename__ = "blood_banks"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    address = Column(String, nullable=False)
    latitude = Column(Float)
    longitude = Column(Float)
    contact_number = Column(String)
    operating_hours = Column(String)
    available_blood_types = Column(JSON, default=list)
    is_active = Column(Boolean, default=True)
