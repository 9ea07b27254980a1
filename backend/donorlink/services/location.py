"""
Where the requester is.

A position provider is an async callable returning a ``GeoPoint``. It may
raise ``LocationUnavailable`` (or ``PermissionDenied``) or simply never
finish; ``resolve_origin`` bounds each provider with a timeout and falls
through to the next one, ending in an "unknown location" result.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from donorlink.config import GEOLOCATION_TIMEOUT_SECONDS
from donorlink.core.proximity import GeoPoint

logger = logging.getLogger(__name__)


class LocationUnavailable(Exception):
    reason = "unavailable"


class PermissionDenied(LocationUnavailable):
    reason = "permission_denied"


@dataclass(frozen=True)
class LocationResult:
    point: Optional[GeoPoint] = None
    source: Optional[str] = None
    reason: Optional[str] = None

    @property
    def known(self) -> bool:
        return self.point is not None


async def resolve_origin(providers, timeout: float = GEOLOCATION_TIMEOUT_SECONDS) -> LocationResult:
    """Try ``(name, provider)`` pairs in order; first point wins."""
    reason = "unavailable"
    for name, provider in providers:
        try:
            point = await asyncio.wait_for(provider(), timeout)
        except asyncio.TimeoutError:
            logger.warning("Location provider %s timed out after %.1fs", name, timeout)
            reason = "timeout"
            continue
        except LocationUnavailable as exc:
            logger.info("Location provider %s gave no position: %s", name, exc.reason)
            reason = exc.reason
            continue

        if point is not None:
            return LocationResult(point=point, source=name)

    return LocationResult(reason=reason)


def explicit_position(latitude, longitude):
    """Coordinates the client sent along with the request."""
    async def provider():
        point = GeoPoint.from_pair(latitude, longitude)
        if point is None:
            raise LocationUnavailable()
        return point
    return provider


def saved_position(profile):
    """The location stored on the caller's profile."""
    async def provider():
        if profile is None:
            raise LocationUnavailable()
        point = GeoPoint.from_pair(profile.latitude, profile.longitude)
        if point is None:
            raise LocationUnavailable()
        return point
    return provider
