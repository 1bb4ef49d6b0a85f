"""
Authentication service layer.

Email/password accounts with bcrypt hashes, persisted through a UserStore,
plus a single "current user" session that survives restarts. Every
operation returns a Success/Failure outcome; validation short-circuits at
the first failing rule and a failure never changes stored or in-memory
state.
"""

from __future__ import annotations

from typing import Optional

from authapp.models.user import User
from authapp.services.user_store import UserStore
from authapp.storage.json_store import LOCK_TIMEOUT_SECONDS
from authapp.utils.exceptions import StorageError
from authapp.utils.logger import get_logger

from .errors import AuthError
from .passwords import DEFAULT_ROUNDS, hash_password, verify_password
from .result import Failure, Result, Success
from .validation import MIN_PASSWORD_LENGTH, is_valid_email

logger = get_logger(__name__)


class AuthenticationService:
    """Login, signup and logout over a UserStore"""

    def __init__(
        self,
        store: UserStore,
        *,
        min_password_length: int = MIN_PASSWORD_LENGTH,
        bcrypt_rounds: int = DEFAULT_ROUNDS,
        lock_timeout_seconds: float = LOCK_TIMEOUT_SECONDS,
    ) -> None:
        self._store = store
        self._min_password_length = min_password_length
        self._bcrypt_rounds = bcrypt_rounds
        self._lock_timeout_seconds = lock_timeout_seconds
        self._current_user: Optional[User] = store.load_current_session()
        if self._current_user is not None:
            logger.info("Restored session", user_id=self._current_user.id)

    @property
    def current_user(self) -> Optional[User]:
        return self._current_user

    @property
    def is_authenticated(self) -> bool:
        return self._current_user is not None

    def login(self, email: str, password: str) -> Result[User]:
        if not email:
            return Failure(AuthError.EMPTY_EMAIL)
        if not password:
            return Failure(AuthError.EMPTY_PASSWORD)
        if not is_valid_email(email):
            return Failure(AuthError.INVALID_EMAIL)

        user = self._store.find_by_email(email)
        if user is None:
            logger.info("Login rejected", reason=AuthError.USER_NOT_FOUND.value)
            return Failure(AuthError.USER_NOT_FOUND)

        if not verify_password(password, user.password_hash):
            logger.info("Login rejected", reason=AuthError.INCORRECT_PASSWORD.value, user_id=user.id)
            return Failure(AuthError.INCORRECT_PASSWORD)

        try:
            self._store.save_current_session(user)
        except StorageError as e:
            logger.error("Failed to persist session", user_id=user.id, error=str(e))
            return Failure(AuthError.PERSISTENCE_FAILURE)

        self._current_user = user
        logger.info("User logged in", user_id=user.id)
        return Success(user)

    def signup(self, name: str, email: str, password: str) -> Result[User]:
        if not name:
            return Failure(AuthError.EMPTY_NAME)
        if not email:
            return Failure(AuthError.EMPTY_EMAIL)
        if not password:
            return Failure(AuthError.EMPTY_PASSWORD)
        if not is_valid_email(email):
            return Failure(AuthError.INVALID_EMAIL)
        if len(password) < self._min_password_length:
            return Failure(AuthError.PASSWORD_TOO_SHORT)

        try:
            with self._store.write_lock(timeout_seconds=self._lock_timeout_seconds):
                return self._create_user(name, email, password)
        except TimeoutError as e:
            logger.error("Could not lock user list", error=str(e))
            return Failure(AuthError.PERSISTENCE_FAILURE)

    def _create_user(self, name: str, email: str, password: str) -> Result[User]:
        users = self._store.load_users()
        if any(u.has_email(email) for u in users):
            return Failure(AuthError.EMAIL_ALREADY_EXISTS)

        new_user = User(
            name=name,
            email=email,
            password_hash=hash_password(password, rounds=self._bcrypt_rounds),
        )

        try:
            self._store.save_users(users + [new_user])
        except StorageError as e:
            logger.error("Failed to persist user list", error=str(e))
            return Failure(AuthError.PERSISTENCE_FAILURE)

        try:
            self._store.save_current_session(new_user)
        except StorageError as e:
            logger.error("Failed to persist session, rolling back signup", user_id=new_user.id, error=str(e))
            self._restore_users(users)
            return Failure(AuthError.PERSISTENCE_FAILURE)

        self._current_user = new_user
        logger.info("User signed up", user_id=new_user.id, user_count=len(users) + 1)
        return Success(new_user)

    def _restore_users(self, users: list) -> None:
        try:
            self._store.save_users(users)
        except StorageError as e:
            logger.error("Rollback of user list failed", error=str(e))

    def logout(self) -> None:
        previous = self._current_user
        self._current_user = None
        try:
            self._store.clear_current_session()
        except StorageError as e:
            logger.warning("Failed to remove persisted session", error=str(e))
        if previous is not None:
            logger.info("User logged out", user_id=previous.id)
