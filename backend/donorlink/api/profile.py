from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from donorlink.api.deps import require_screen
from donorlink.core.session import SessionManager
from donorlink.database import get_db
from donorlink.schemas.request import ProfileUpdate
from donorlink.schemas.response import ProfileResponse
from donorlink.services.profiles import ProfileStore, ProfileUpdateError

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(manager: SessionManager = Depends(require_screen("profile"))):
    return manager.profile


@router.patch("/me", response_model=ProfileResponse)
async def update_my_profile(
    update: ProfileUpdate,
    manager: SessionManager = Depends(require_screen("editProfile")),
    db: Session = Depends(get_db),
):
    fields = update.model_dump(exclude_unset=True)
    if not fields:
        raise HTTPException(status_code=400, detail="No fields to update")
    try:
        return ProfileStore(db).update_profile(manager.session.user_id, fields)
    except ProfileUpdateError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError:
        raise HTTPException(status_code=404, detail="Profile not found")
