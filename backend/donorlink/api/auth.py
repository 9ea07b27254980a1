
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from donorlink.database import get_db
from donorlink.models.user import User
from donorlink.schemas.request import UserLogin, UserCreate
from donorlink.security import create_access_token, hash_password, verify_password
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register")
async def register(user_in: UserCreate, db: Session = Depends(get_db)):
    db_user = db.query(User).filter(User.email == user_in.email).first()
    if db_user:
        raise HTTPException(status_code=400, detail="Email already registered")

    new_user = User(
        email=user_in.email,
        hashed_password=hash_password(user_in.password),
        full_name=user_in.full_name,
        role=user_in.role,
        blood_group=user_in.blood_group,
        phone_number=user_in.phone_number,
        is_available=user_in.is_available,
        location_address=user_in.location_address,
        latitude=user_in.latitude,
        longitude=user_in.longitude,
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    logger.info("Registered %s as %s", new_user.id, new_user.role)
    return {"msg": "User created", "id": new_user.id, "role": new_user.role}


@router.post("/login")
async def login(user_in: UserLogin, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == user_in.email).first()
    if not user or not verify_password(user_in.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token({"sub": str(user.id)})

    return {
        "access_token": token,
        "token_type": "bearer",
        "role": user.role,
        "full_name": user.full_name
    }
