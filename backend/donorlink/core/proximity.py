"""
Haversine Algorithm - rank donors, hospitals and blood banks by distance
from the requester, after attribute filters.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional

EARTH_RADIUS_KM = 6371.0

# simplified model: 2.5 mins per km
MINUTES_PER_KM = 2.5


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float

    @classmethod
    def from_pair(cls, latitude, longitude) -> Optional["GeoPoint"]:
        """Build a point only when both coordinates are present."""
        if latitude is None or longitude is None:
            return None
        return cls(float(latitude), float(longitude))


def haversine_km(a: GeoPoint, b: GeoPoint) -> float:
    """
    Great-circle distance between two points in kilometers.

    Note: This is "as the crow flies" distance, not road distance.
    """
    lat1, lon1, lat2, lon2 = map(math.radians, [a.latitude, a.longitude, b.latitude, b.longitude])

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))


@dataclass(frozen=True)
class Candidate:
    id: str
    kind: str
    display_name: str
    location: Optional[GeoPoint] = None
    blood_group: Optional[str] = None
    is_available: bool = False
    address: Optional[str] = None
    # blood banks list every group they hold instead of a single group
    stocked_groups: tuple = ()
    raw: dict = field(default_factory=dict, compare=False)

    def has_blood_group(self, group: str) -> bool:
        return self.blood_group == group or group in self.stocked_groups

    def matches_text(self, needle: str) -> bool:
        for value in (self.display_name, self.address):
            if value and needle in value.lower():
                return True
        return False


@dataclass(frozen=True)
class SearchFilters:
    blood_group: Optional[str] = None
    max_radius_km: Optional[float] = None
    available_only: bool = False
    text_query: Optional[str] = None


@dataclass(frozen=True)
class RankedCandidate:
    candidate: Candidate
    distance_km: Optional[float] = None

    @property
    def distance_text(self) -> Optional[str]:
        if self.distance_km is None:
            return None
        if self.distance_km < 1:
            return f"{round(self.distance_km * 1000)} m"
        return f"{self.distance_km:.1f} km"

    @property
    def eta_minutes(self) -> Optional[int]:
        if self.distance_km is None:
            return None
        return int(self.distance_km * MINUTES_PER_KM)

    @property
    def maps_url(self) -> Optional[str]:
        point = self.candidate.location
        if point is None:
            return None
        return (
            "https://www.google.com/maps/dir/?api=1"
            f"&destination={point.latitude},{point.longitude}"
        )


@dataclass(frozen=True)
class SearchOutcome:
    results: List[RankedCandidate]
    no_origin: bool = False

    @property
    def empty(self) -> bool:
        return not self.results


def apply_filters(candidates, filters: SearchFilters) -> List[Candidate]:
    """Blood group, availability and text filters, in that order."""
    filtered = list(candidates)

    if filters.blood_group:
        filtered = [c for c in filtered if c.has_blood_group(filters.blood_group)]

    if filters.available_only:
        filtered = [c for c in filtered if c.is_available is True]

    needle = (filters.text_query or "").strip().lower()
    if needle:
        filtered = [c for c in filtered if c.matches_text(needle)]

    return filtered


def search(
    origin: Optional[GeoPoint],
    candidates,
    filters: Optional[SearchFilters] = None,
    sort_by_distance: bool = True,
    limit: Optional[int] = None,
) -> SearchOutcome:
    """
    Filter ``candidates`` and rank them by distance from ``origin``.

    Without an origin only the attribute filters run and the input order is
    kept, so callers can show a list before the location is known.
    Candidates are never mutated; distances live on the returned wrappers.
    """
    filters = filters or SearchFilters()

    if origin is None:
        remaining = apply_filters(candidates, filters)
        return SearchOutcome(
            results=_truncate([RankedCandidate(c) for c in remaining], limit),
            no_origin=True,
        )

    remaining = list(candidates)
    if filters.max_radius_km is not None or sort_by_distance:
        remaining = [c for c in remaining if c.location is not None]

    remaining = apply_filters(remaining, filters)

    ranked = [
        RankedCandidate(c, haversine_km(origin, c.location) if c.location is not None else None)
        for c in remaining
    ]

    if filters.max_radius_km is not None:
        ranked = [r for r in ranked if r.distance_km <= filters.max_radius_km]

    if sort_by_distance:
        # list.sort is stable, equal distances keep their input order
        ranked.sort(key=lambda r: r.distance_km)

    return SearchOutcome(results=_truncate(ranked, limit))


def _truncate(results, limit):
    if limit is None:
        return results
    return results[:limit]
