import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import User
from ..schemas import LoginRequest, LoginResponse, UserRead
from ..security import CurrentUser, create_access_token, get_current_user, verify_password

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> dict:
    user = db.execute(
        select(User).where(User.username == payload.username.strip())
    ).scalar_one_or_none()
    if user is None or not verify_password(payload.password, user.password_hash):
        logger.info("Failed login for %s", payload.username)
        raise HTTPException(status_code=401, detail="Invalid username or password")
    return {"token": create_access_token(user), "user": user}


@router.get("/me", response_model=UserRead)
def me(
    db: Session = Depends(get_db), current: CurrentUser = Depends(get_current_user)
) -> User:
    user = db.get(User, current.id) if current.id is not None else None
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user
