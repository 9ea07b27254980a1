from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from donorlink.core.access import SCREENS, AccessSignal, RouteDecision, resolve_screen
from donorlink.core.session import SessionManager, load_profile
from donorlink.database import get_db
from donorlink.security import decode_subject
from donorlink.services.profiles import ProfileStore

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


async def get_session(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> SessionManager:
    """Session for this request. Missing or invalid tokens give an anonymous one."""
    manager = SessionManager()
    user_id = decode_subject(token) if token else None
    if user_id is None:
        return manager

    manager.sign_in(user_id)
    await load_profile(manager, ProfileStore(db).fetch_profile)
    return manager


def decision_payload(decision: RouteDecision) -> dict:
    screen = SCREENS[decision.screen]
    return {
        "requested": decision.requested,
        "screen": decision.screen,
        "path": screen.path,
        "component": screen.component,
        "redirected": decision.redirected,
        "signal": decision.signal.value,
    }


def ensure_allowed(decision: RouteDecision):
    if not decision.redirected:
        return
    if decision.signal == AccessSignal.AUTH_REQUIRED:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=decision_payload(decision),
            headers={"WWW-Authenticate": "Bearer"},
        )
    raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=decision_payload(decision))


def require_screen(screen_key: str):
    def dependency(manager: SessionManager = Depends(get_session)) -> SessionManager:
        ensure_allowed(resolve_screen(manager.session, screen_key))
        return manager
    return dependency
