from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
import logging

import bcrypt
import jwt
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.orm import Session

from .config import settings
from .db import get_db
from .models import RoleEnum, User

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    id: int | None
    username: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == RoleEnum.ADMIN.value


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), hashed.encode())
    except ValueError:
        return False


def create_access_token(user: User) -> str:
    expire = datetime.now(timezone.utc) + timedelta(
        hours=settings.access_token_expire_hours
    )
    payload = {
        "sub": str(user.id),
        "username": user.username,
        "role": _role_value(user.role),
        "exp": expire,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=ALGORITHM)


def _role_value(role) -> str:
    return role.value if hasattr(role, "value") else str(role)


def _dev_user(db: Session) -> CurrentUser:
    admin = db.execute(
        select(User).where(User.role == RoleEnum.ADMIN).order_by(User.id).limit(1)
    ).scalar_one_or_none()
    if admin is None:
        return CurrentUser(id=None, username="dev", role=RoleEnum.ADMIN.value)
    return CurrentUser(id=admin.id, username=admin.username, role=RoleEnum.ADMIN.value)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> CurrentUser:
    if settings.disable_auth:
        return _dev_user(db)
    if credentials is None:
        raise HTTPException(status_code=401, detail="Authentication token required")
    try:
        payload = jwt.decode(
            credentials.credentials, settings.secret_key, algorithms=[ALGORITHM]
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid token")

    user_id = payload.get("sub")
    user = db.get(User, int(user_id)) if user_id and user_id.isdigit() else None
    if user is None:
        raise HTTPException(status_code=401, detail="User not found")
    return CurrentUser(id=user.id, username=user.username, role=_role_value(user.role))


def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not user.is_admin:
        logger.info("Admin-only operation refused for user %s", user.username)
        raise HTTPException(
            status_code=403, detail="Access denied. Administrator role required."
        )
    return user


def client_ip(request: Request) -> str | None:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None
