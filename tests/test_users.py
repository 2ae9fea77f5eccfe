"""Tests for sign-up, login, profile and point spending."""

import asyncio
from concurrent.futures import ThreadPoolExecutor

import pytest

from restroom_finder_api.app.core.db import transaction
from restroom_finder_api.app.core.exceptions import InsufficientPointsError, UserNotFoundError, ValidationError
from restroom_finder_api.app.repositories.user_repository import UserRepository
from restroom_finder_api.app.services.user_service import UserService


def signup(client, email="Carol@Example.com", nickname="carol", password="longenough"):
    return client.post("/api/users/signup", json={"email": email, "nickname": nickname, "password": password})


def test_signup_then_me(client):
    response = signup(client)

    assert response.status_code == 200
    token = response.json()["data"]
    assert token["token_type"] == "bearer"

    me = client.get("/api/users/me", headers={"Authorization": f"Bearer {token['access_token']}"})
    assert me.json()["data"] == {"user_id": token["user_id"], "email": "carol@example.com", "nickname": "carol", "point": 0}


def test_duplicate_signup(client):
    signup(client)

    response = signup(client, email="carol@example.com", nickname="other")

    assert response.status_code == 409
    assert response.json()["code"] == "07"
    assert response.json()["data"]["status"] == "DUPLICATE_USER"


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "not-an-email", "nickname": "x", "password": "longenough"},
        {"email": "dave@example.com", "nickname": "dave", "password": "short"},
        {"email": "dave@example.com", "password": "longenough"},
    ],
    ids=["email", "password", "nickname-missing"],
)
def test_signup_validation(client, payload):
    response = client.post("/api/users/signup", json=payload)

    assert response.status_code == 400
    assert response.json()["code"] == "23"


def test_login(client):
    user_id = signup(client).json()["data"]["user_id"]

    response = client.post("/api/users/login", json={"email": "CAROL@example.com", "password": "longenough"})

    assert response.status_code == 200
    assert response.json()["data"]["user_id"] == user_id


@pytest.mark.parametrize(
    "email, password",
    [("carol@example.com", "wrong-password"), ("nobody@example.com", "longenough")],
)
def test_login_failed(client, email, password):
    signup(client)

    response = client.post("/api/users/login", json={"email": email, "password": password})

    assert response.status_code == 401
    assert response.json()["code"] == "09"


def test_use_points(client, auth_headers, make_user):
    user_id = make_user(point=1500)
    headers = auth_headers(user_id)

    response = client.post("/api/users/points/use", json={"point": 500}, headers=headers)

    assert response.json()["data"] == {"user_id": user_id, "point": 500}
    assert client.get("/api/users/me", headers=headers).json()["data"]["point"] == 1000


def test_use_more_points_than_held(client, auth_headers, make_user):
    user_id = make_user(point=300)
    headers = auth_headers(user_id)

    response = client.post("/api/users/points/use", json={"point": 301}, headers=headers)

    assert response.status_code == 400
    assert response.json()["code"] == "21"
    assert response.json()["data"]["status"] == "INSUFFICIENT_POINTS"
    assert client.get("/api/users/me", headers=headers).json()["data"]["point"] == 300


def test_use_non_positive_points(client, auth_headers, user_id):
    response = client.post("/api/users/points/use", json={"point": 0}, headers=auth_headers(user_id))

    assert response.status_code == 400
    assert response.json()["code"] == "23"


def test_charge_points(user_id):
    change = asyncio.run(UserService.charge_points(user_id, 700))

    assert change.point == 700
    assert asyncio.run(UserService.get_me(user_id)).point == 700


def test_charge_points_rejects_bad_input(user_id):
    with pytest.raises(ValidationError):
        asyncio.run(UserService.charge_points(user_id, 0))
    with pytest.raises(UserNotFoundError):
        asyncio.run(UserService.charge_points(999, 10))


def test_token_for_deleted_user(client, auth_headers):
    response = client.get("/api/users/me", headers=auth_headers(999))

    assert response.status_code == 401
    assert response.json()["code"] == "06"


def test_subtract_point_is_conditional(make_user):
    user_id = make_user(point=100)

    with transaction() as conn:
        users = UserRepository(conn)
        assert users.subtract_point(user_id, 150) is False
        assert users.subtract_point(user_id, 100) is True
        assert users.find_by_id(user_id).point == 0


def test_concurrent_point_use_never_overdraws(make_user):
    user_id = make_user(point=500)

    def spend():
        try:
            asyncio.run(UserService.use_points(user_id, 100))
            return True
        except InsufficientPointsError:
            return False

    with ThreadPoolExecutor(max_workers=8) as pool:
        outcomes = list(pool.map(lambda _: spend(), range(12)))

    assert outcomes.count(True) == 5
    assert asyncio.run(UserService.get_me(user_id)).point == 0


def test_concurrent_charges_all_land(user_id):
    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda _: asyncio.run(UserService.charge_points(user_id, 10)), range(20)))

    assert asyncio.run(UserService.get_me(user_id)).point == 200


def test_point_amount_beyond_integer_range(client, auth_headers, user_id):
    response = client.post("/api/users/points/use", json={"point": 2**70}, headers=auth_headers(user_id))

    assert response.status_code == 400
    assert response.json()["code"] == "23"
