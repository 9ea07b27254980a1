from fastapi import APIRouter, Depends, Query
from typing import List
from dataclasses import asdict

from donorlink.api.deps import decision_payload, get_session
from donorlink.core.access import accessible_screens, breadcrumbs, default_screen
from donorlink.core.session import SessionManager
from donorlink.schemas.request import ScreenRequest
from donorlink.schemas.response import Breadcrumb, NavigationResponse, RouteDecisionResponse

router = APIRouter(prefix="/navigation", tags=["navigation"])


@router.post("/resolve", response_model=RouteDecisionResponse)
async def resolve_requested_screen(req: ScreenRequest, manager: SessionManager = Depends(get_session)):
    # Redirects are answers, not errors
    return decision_payload(manager.navigate(req.screen))


@router.get("/items", response_model=NavigationResponse)
async def get_navigation_items(manager: SessionManager = Depends(get_session)):
    session = manager.session
    return {
        "state": session.state.value,
        "role": session.role.value if session.role else None,
        "default_screen": default_screen(session.role if session.authenticated else None),
        "items": [asdict(item) for item in manager.nav_items],
    }


@router.get("/screens", response_model=List[str])
async def get_accessible_screens(manager: SessionManager = Depends(get_session)):
    return [screen.key for screen in accessible_screens(manager.session.role)]


@router.get("/breadcrumbs", response_model=List[Breadcrumb])
async def get_breadcrumbs(path: str = Query(..., description="Client path, e.g. /hospital/requests"),
                          manager: SessionManager = Depends(get_session)):
    return breadcrumbs(path, manager.session.role)
