"""
Business logic for accounts and point balances.

Passwords are stored as PBKDF2 hashes (see ``core.security``).  Points
are bought through in-app purchases and spent by the client; a balance
never goes negative.
"""

import logging
import sqlite3

from ..core.db import MAX_ID, ROLE_USER, transaction
from ..core.exceptions import (
    DuplicateUserError,
    InsufficientPointsError,
    LoginFailedError,
    UserNotFoundError,
    ValidationError,
)
from ..core.security import create_user_token, hash_password, verify_password
from ..models.user import User
from ..repositories.user_repository import UserRepository
from ..schemas.user import PointChange, TokenRead, UserLogin, UserRead, UserSignup

logger = logging.getLogger(__name__)


def to_user_read(user: User) -> UserRead:
    return UserRead(user_id=user.id, email=user.email, nickname=user.nickname, point=user.point)


class UserService:
    """Service for user accounts."""

    @classmethod
    async def signup(cls, data: UserSignup) -> TokenRead:
        """Register a user and return an access token for it.

        Raises ``DuplicateUserError`` when the email is already taken.
        """
        with transaction() as conn:
            users = UserRepository(conn)
            if users.find_by_email(data.email) is not None:
                raise DuplicateUserError(f"Email {data.email} is already registered")
            user = users.save(
                email=data.email,
                nickname=data.nickname.strip(),
                password=hash_password(data.password),
                role_id=ROLE_USER,
            )
        logger.info("Registered user %s", user.id)
        return TokenRead(access_token=create_user_token(user.id), user_id=user.id)

    @classmethod
    async def login(cls, data: UserLogin) -> TokenRead:
        with transaction() as conn:
            user = UserRepository(conn).find_by_email(data.email.strip().lower())
        if user is None or user.disabled or not verify_password(data.password, user.password):
            raise LoginFailedError()
        return TokenRead(access_token=create_user_token(user.id), user_id=user.id)

    @classmethod
    async def get_me(cls, user_id: int) -> UserRead:
        with transaction() as conn:
            user = UserRepository(conn).find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(f"User {user_id} not found")
        return to_user_read(user)

    @classmethod
    async def charge_points(cls, user_id: int, point: int) -> PointChange:
        with transaction() as conn:
            return cls.apply_point_charge(conn, user_id, point)

    @classmethod
    async def use_points(cls, user_id: int, point: int) -> PointChange:
        """Spend ``point`` points.

        Raises ``InsufficientPointsError`` and leaves the balance alone
        when the user holds fewer points than requested.
        """
        if not 0 < point <= MAX_ID:
            raise ValidationError("point out of range")
        with transaction() as conn:
            users = UserRepository(conn)
            user = users.find_by_id(user_id)
            if user is None:
                raise UserNotFoundError(f"User {user_id} not found")
            if not users.subtract_point(user_id, point):
                raise InsufficientPointsError(f"Not enough points to spend {point}")
        logger.info("User %s spent %s points", user_id, point)
        return PointChange(user_id=user_id, point=point)

    @staticmethod
    def apply_point_charge(conn: sqlite3.Connection, user_id: int, point: int) -> PointChange:
        """Add points within the caller's transaction."""
        if not 0 < point <= MAX_ID:
            raise ValidationError("point out of range")
        users = UserRepository(conn)
        user = users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(f"User {user_id} not found")
        users.add_point(user_id, point)
        logger.info("User %s charged %s points", user_id, point)
        return PointChange(user_id=user_id, point=point)
