from fastapi import APIRouter, Depends, Query

from donorlink.core.proximity import GeoPoint
from donorlink.schemas.response import GeocodeLabel, GeocodeMatches
from donorlink.services.geocoding import Geocoder, get_geocoder

router = APIRouter(prefix="/location", tags=["location"])


@router.get("/reverse", response_model=GeocodeLabel)
def reverse_lookup(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    geocoder: Geocoder = Depends(get_geocoder),
):
    point = GeoPoint(latitude, longitude)
    return {"latitude": latitude, "longitude": longitude, "label": geocoder.reverse_geocode(point)}


@router.get("/search", response_model=GeocodeMatches)
def address_search(q: str = Query(...), geocoder: Geocoder = Depends(get_geocoder)):
    points = geocoder.search_address(q)
    return {
        "query": q,
        "results": [{"latitude": p.latitude, "longitude": p.longitude} for p in points],
    }
