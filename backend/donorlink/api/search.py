
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging
from donorlink.api.deps import ensure_allowed, get_session
from donorlink.core import proximity
from donorlink.core.access import resolve_screen
from donorlink.core.proximity import SearchFilters
from donorlink.core.session import SessionManager
from donorlink.database import get_db
from donorlink.schemas.request import ProximitySearchRequest
from donorlink.schemas.response import BloodSearchResponse
from donorlink.services.candidates import CandidateKind, CandidateStore
from donorlink.services.location import explicit_position, resolve_origin, saved_position

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])

# Discovery screen that has to be reachable before a kind can be searched
DISCOVERY_SCREENS = {
    CandidateKind.DONOR: "donorSearch",
    CandidateKind.HOSPITAL: "hospitals",
    CandidateKind.BLOOD_BANK: "banks",
}


def format_result(ranked: proximity.RankedCandidate) -> dict:
    c = ranked.candidate
    return {
        "id": c.id,
        "kind": c.kind,
        "name": c.display_name,
        "address": c.address,
        "blood_group": c.blood_group,
        "stocked_groups": list(c.stocked_groups),
        "is_available": c.is_available,
        "latitude": c.location.latitude if c.location else None,
        "longitude": c.location.longitude if c.location else None,
        "distance_km": round(ranked.distance_km, 2) if ranked.distance_km is not None else None,
        "distance_text": ranked.distance_text,
        "eta_minutes": ranked.eta_minutes,
        "google_maps_url": ranked.maps_url,
        "details": c.raw,
    }


@router.post("/{kind}", response_model=BloodSearchResponse)
async def search_candidates(
    kind: CandidateKind,
    req: ProximitySearchRequest,
    manager: SessionManager = Depends(get_session),
    db: Session = Depends(get_db),
):
    ensure_allowed(resolve_screen(manager.session, DISCOVERY_SCREENS[kind]))

    providers = [("request", explicit_position(req.latitude, req.longitude))]
    if req.use_saved_location:
        providers.append(("profile", saved_position(manager.profile)))
    location = await resolve_origin(providers)

    candidates = CandidateStore(db).list_candidates(
        kind,
        blood_group=req.blood_group,
        available_only=req.available_only,
    )
    filters = SearchFilters(
        blood_group=req.blood_group,
        max_radius_km=req.max_radius_km,
        available_only=req.available_only,
        text_query=req.text_query,
    )
    outcome = proximity.search(location.point, candidates, filters, limit=req.limit)

    if outcome.no_origin:
        logger.info("Searching %s without a location (%s)", kind.value, location.reason)

    return {
        "results": [format_result(r) for r in outcome.results],
        "count": len(outcome.results),
        "location_known": location.known,
        "location_source": location.source,
        "location_reason": location.reason,
    }
