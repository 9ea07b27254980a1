from pydantic import BaseModel
from typing import List, Optional


class RouteDecisionResponse(BaseModel):
    requested: str
    screen: str
    path: str
    component: str
    redirected: bool
    signal: str


class NavItemResponse(BaseModel):
    key: str
    label: str
    icon: str
    screen: str
    requires_auth: bool
    enabled: bool


class NavigationResponse(BaseModel):
    state: str
    role: Optional[str] = None
    default_screen: str
    items: List[NavItemResponse]


class Breadcrumb(BaseModel):
    label: str
    path: Optional[str] = None
    icon: Optional[str] = None


class ProfileResponse(BaseModel):
    id: str
    email: str
    full_name: str
    role: str
    blood_group: Optional[str] = None
    phone_number: Optional[str] = None
    is_available: bool
    location_address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    is_verified: bool

    model_config = {"from_attributes": True}


class CandidateResult(BaseModel):
    id: str
    kind: str
    name: str
    address: Optional[str] = None
    blood_group: Optional[str] = None
    stocked_groups: List[str] = []
    is_available: bool
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    distance_km: Optional[float] = None
    distance_text: Optional[str] = None
    eta_minutes: Optional[int] = None
    google_maps_url: Optional[str] = None
    details: dict = {}


class BloodSearchResponse(BaseModel):
    results: List[CandidateResult]
    count: int
    location_known: bool
    location_source: Optional[str] = None
    location_reason: Optional[str] = None


class GeocodeLabel(BaseModel):
    latitude: float
    longitude: float
    label: str


class GeocodeMatches(BaseModel):
    query: str
    results: List[dict]
