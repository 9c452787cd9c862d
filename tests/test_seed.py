from sqlalchemy import select

from dispatch_desk import seed as seed_module
from dispatch_desk.models import ConfigEntry, RoleEnum, User
from dispatch_desk.security import verify_password


def test_seed_is_idempotent(SessionLocal, monkeypatch):
    monkeypatch.setattr(seed_module, "SessionLocal", SessionLocal)

    assert seed_module.seed() == (1, 1)
    assert seed_module.seed() == (0, 0)

    with SessionLocal() as session:
        admin = session.execute(select(User)).scalar_one()
        entry = session.execute(select(ConfigEntry)).scalar_one()
    assert admin.role == RoleEnum.ADMIN
    assert verify_password(seed_module.settings.admin_password, admin.password_hash)
    assert (entry.key, entry.value) == ("dispatch_start_number", "1")
