from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from donorlink.api.deps import require_screen
from donorlink.database import get_db
from donorlink.schemas.request import RoleUpdate
from donorlink.schemas.response import ProfileResponse
from donorlink.services.profiles import ProfileStore

router = APIRouter(prefix="/admin", tags=["admin"])


@router.put(
    "/users/{user_id}/role",
    response_model=ProfileResponse,
    dependencies=[Depends(require_screen("adminUsers"))],
)
async def update_user_role(user_id: str, update: RoleUpdate, db: Session = Depends(get_db)):
    try:
        return ProfileStore(db).set_role(user_id, update.role)
    except LookupError:
        raise HTTPException(status_code=404, detail="User not found")
