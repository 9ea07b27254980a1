
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from typing import Optional
from donorlink.core.roles import BLOOD_GROUPS, UserRole

SIGNUP_ROLES = (UserRole.DONOR, UserRole.HOSPITAL, UserRole.AGENT)


def _check_blood_group(value):
    if value is not None and value not in BLOOD_GROUPS:
        raise ValueError(f"blood group must be one of {', '.join(BLOOD_GROUPS)}")
    return value


def _check_pair(model):
    if (model.latitude is None) != (model.longitude is None):
        raise ValueError("latitude and longitude must be given together")
    return model


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    full_name: str
    role: str = UserRole.DONOR.value
    blood_group: Optional[str] = None
    phone_number: Optional[str] = None
    is_available: bool = True
    location_address: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)

    @field_validator("role")
    @classmethod
    def signup_role(cls, value):
        role = UserRole.parse(value)
        if role not in SIGNUP_ROLES:
            raise ValueError("role must be donor, hospital or agent")
        return role.value

    @field_validator("blood_group")
    @classmethod
    def known_blood_group(cls, value):
        return _check_blood_group(value)

    @model_validator(mode="after")
    def coordinates_paired(self):
        return _check_pair(self)


class ProfileUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    full_name: Optional[str] = None
    phone_number: Optional[str] = None
    blood_group: Optional[str] = None
    is_available: Optional[bool] = None
    address: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)

    @field_validator("blood_group")
    @classmethod
    def known_blood_group(cls, value):
        return _check_blood_group(value)

    @field_validator("full_name", "is_available")
    @classmethod
    def not_null(cls, value):
        # may be left out, but never cleared
        if value is None:
            raise ValueError("may not be null")
        return value

    @model_validator(mode="after")
    def coordinates_paired(self):
        return _check_pair(self)


class RoleUpdate(BaseModel):
    role: UserRole


class ScreenRequest(BaseModel):
    screen: str


class ProximitySearchRequest(BaseModel):
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    blood_group: Optional[str] = None
    max_radius_km: Optional[float] = Field(default=None, gt=0)
    available_only: bool = False
    text_query: Optional[str] = None
    limit: Optional[int] = Field(default=None, ge=1)
    use_saved_location: bool = True

    @field_validator("blood_group")
    @classmethod
    def known_blood_group(cls, value):
        return _check_blood_group(value)
