import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from dispatch_desk.db import get_db
from dispatch_desk.main import app
from dispatch_desk.models import Base, ConfigEntry, DISPATCH_START_NUMBER_KEY, RoleEnum, User
from dispatch_desk.security import create_access_token, hash_password


@pytest.fixture()
def engine(tmp_path):
    db_path = tmp_path / "test.db"
    engine = create_engine(
        f"sqlite+pysqlite:///{db_path}", connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture()
def SessionLocal(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db_session(SessionLocal):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(SessionLocal):
    def override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _make_user(db_session, username: str, role: RoleEnum) -> User:
    user = User(username=username, password_hash=hash_password("secret123"), role=role)
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture()
def admin_user(db_session):
    return _make_user(db_session, "admin", RoleEnum.ADMIN)


@pytest.fixture()
def employee_user(db_session):
    return _make_user(db_session, "empleado", RoleEnum.EMPLOYEE)


@pytest.fixture()
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {create_access_token(admin_user)}"}


@pytest.fixture()
def employee_headers(employee_user):
    return {"Authorization": f"Bearer {create_access_token(employee_user)}"}


@pytest.fixture()
def start_number(db_session):
    entry = ConfigEntry(
        key=DISPATCH_START_NUMBER_KEY,
        value="1",
        description="Starting number for the dispatch sequence",
    )
    db_session.add(entry)
    db_session.commit()
    return entry
