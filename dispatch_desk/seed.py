from __future__ import annotations

from sqlalchemy import select

from .config import settings
from .db import SessionLocal
from .models import RoleEnum, User
from .security import hash_password
from .services import config_store


def seed_admin(session) -> int:
    exists = session.execute(
        select(User).where(User.username == settings.admin_username)
    ).scalar_one_or_none()
    if exists:
        return 0
    session.add(
        User(
            username=settings.admin_username,
            password_hash=hash_password(settings.admin_password),
            role=RoleEnum.ADMIN,
        )
    )
    return 1


def seed() -> tuple[int, int]:
    with SessionLocal() as session:
        users = seed_admin(session)
        settings_created = config_store.ensure_defaults(session)
        session.commit()
    return users, settings_created


def main() -> None:
    users, settings_created = seed()
    print(f"Seeded admin users: {users}")
    print(f"Seeded config entries: {settings_created}")


if __name__ == "__main__":
    main()
