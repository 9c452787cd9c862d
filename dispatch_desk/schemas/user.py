from datetime import datetime

from pydantic import Field

from ..models import RoleEnum
from .base import CamelModel


class LoginRequest(CamelModel):
    username: str
    password: str


class UserRead(CamelModel):
    id: int
    username: str
    role: RoleEnum
    created_at: datetime | None


class LoginResponse(CamelModel):
    token: str
    user: UserRead


class UserCreate(CamelModel):
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=6)
    role: RoleEnum = RoleEnum.EMPLOYEE


class UserUpdate(CamelModel):
    role: RoleEnum | None = None
    password: str | None = Field(default=None, min_length=6)


class UserList(CamelModel):
    data: list[UserRead]
