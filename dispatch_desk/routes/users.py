from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import User
from ..schemas import UserCreate, UserList, UserRead, UserUpdate
from ..security import CurrentUser, hash_password, require_admin
from ..services import audit

router = APIRouter()


def _get_user_or_404(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("", response_model=UserList)
def users_list(
    db: Session = Depends(get_db), admin: CurrentUser = Depends(require_admin)
) -> dict:
    return {"data": list(db.scalars(select(User).order_by(User.username)))}


@router.post("", response_model=UserRead, status_code=201)
def users_create(
    payload: UserCreate,
    request: Request,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
) -> User:
    user = User(
        username=payload.username.strip(),
        password_hash=hash_password(payload.password),
        role=payload.role,
    )
    db.add(user)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Username already exists")
    audit.record_action(
        db, admin, audit.CREATE, "user", user.id, {"username": user.username}, request
    )
    db.commit()
    return user


@router.put("/{user_id}", response_model=UserRead)
def users_update(
    user_id: int,
    payload: UserUpdate,
    request: Request,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
) -> User:
    user = _get_user_or_404(db, user_id)
    if payload.role is not None:
        user.role = payload.role
    if payload.password:
        user.password_hash = hash_password(payload.password)
    audit.record_action(
        db,
        admin,
        audit.UPDATE,
        "user",
        user.id,
        {"role": payload.role.value if payload.role else None, "passwordChanged": bool(payload.password)},
        request,
    )
    db.commit()
    return user


@router.delete("/{user_id}")
def users_delete(
    user_id: int,
    request: Request,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
) -> dict:
    user = _get_user_or_404(db, user_id)
    if user.id == admin.id:
        raise HTTPException(status_code=400, detail="You cannot delete your own account")
    try:
        db.delete(user)
        db.flush()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="User is referenced by dispatches")
    audit.record_action(
        db, admin, audit.DELETE, "user", user_id, {"username": user.username}, request
    )
    db.commit()
    return {"message": "User deleted"}
