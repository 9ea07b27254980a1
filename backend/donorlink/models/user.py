
from sqlalchemy import Boolean, Column, DateTime, Float, String
from sqlalchemy.sql import func
import uuid
from donorlink.database import Base
from donorlink.core.roles import UserRole


class User(Base):
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String, unique=True, nullable=False, index=True)
    hashed_password = Column(String, nullable=False)
    full_name = Column(String, nullable=False)
    role = Column(String, nullable=False, default=UserRole.DONOR.value)
    blood_group = Column(String)
    phone_number = Column(String)
    is_available = Column(Boolean, default=True, nullable=False)
    latitude = Column(Float)
    longitude = Column(Float)
    location_address = Column(String)
    is_verified = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
