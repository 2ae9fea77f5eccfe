"""
Shared fixtures.

Every test gets its own SQLite file with all migrations applied, so
tests never see each other's rows.  Factories create users and
restrooms directly through the repositories.
"""

import pytest
from fastapi.testclient import TestClient

from restroom_finder_api.app.core.config import settings
from restroom_finder_api.app.core.db import ROLE_ADMIN, ROLE_USER, init_db, transaction
from restroom_finder_api.app.core.security import create_user_token, hash_password
from restroom_finder_api.app.main import create_app
from restroom_finder_api.app.repositories.restroom_repository import RestroomRepository
from restroom_finder_api.app.repositories.user_repository import UserRepository


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "test.db"))
    init_db()
    yield settings.database_url


@pytest.fixture
def client():
    return TestClient(create_app())


@pytest.fixture
def make_user():
    counter = {"n": 0}

    def _make_user(nickname=None, role_id=ROLE_USER, password="password123", point=0):
        counter["n"] += 1
        nickname = nickname or f"user{counter['n']}"
        with transaction() as conn:
            users = UserRepository(conn)
            user = users.save(
                email=f"{nickname}@example.com",
                nickname=nickname,
                password=hash_password(password),
                role_id=role_id,
            )
            if point:
                users.add_point(user.id, point)
        return user.id

    return _make_user


@pytest.fixture
def make_restroom():
    def _make_restroom(name="Station restroom"):
        with transaction() as conn:
            return RestroomRepository(conn).save(name=name, address="1 Main St", latitude=37.5, longitude=127.0).id

    return _make_restroom


@pytest.fixture
def auth_headers():
    def _auth_headers(user_id):
        return {"Authorization": f"Bearer {create_user_token(user_id)}"}

    return _auth_headers


@pytest.fixture
def user_id(make_user):
    return make_user("alice")


@pytest.fixture
def other_user_id(make_user):
    return make_user("bob")


@pytest.fixture
def admin_id(make_user):
    return make_user("admin", role_id=ROLE_ADMIN)


@pytest.fixture
def restroom_id(make_restroom):
    return make_restroom()
