"""
User storage with JSON-based persistence.
Holds the registered user list and the active-session pointer under
namespaced keys of a JsonFileStore.
"""

from contextlib import contextmanager
from typing import Any, Generator, List, Optional

from pydantic import ValidationError

from authapp.models.user import User
from authapp.storage.json_store import LOCK_TIMEOUT_SECONDS, JsonFileStore
from authapp.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_NAMESPACE = "com.authapp"


class UserStore:
    """Durable user list plus the currently signed-in user"""

    def __init__(self, store: JsonFileStore, namespace: str = DEFAULT_NAMESPACE):
        self._store = store
        self.users_key = f"{namespace}.users"
        self.current_user_key = f"{namespace}.currentUser"

    def load_users(self) -> List[User]:
        """Load all users; malformed data is treated as no data"""
        raw = self._store.get(self.users_key)
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("Stored user list is not a list, ignoring it", key=self.users_key)
            return []
        try:
            return [User.model_validate(item) for item in raw]
        except ValidationError as e:
            logger.warning(
                "Stored user list is malformed, ignoring it",
                key=self.users_key,
                error_count=e.error_count(),
            )
            return []

    def save_users(self, users: List[User]) -> None:
        """Atomically overwrite the user list. Raises StorageError."""
        payload = [user.model_dump(mode="json") for user in users]
        self._store.set(self.users_key, payload)

    def find_by_email(self, email: str) -> Optional[User]:
        """Find user by email, ignoring case"""
        return next((u for u in self.load_users() if u.has_email(email)), None)

    def load_current_session(self) -> Optional[User]:
        """Return the persisted signed-in user, or None"""
        raw: Any = self._store.get(self.current_user_key)
        if raw is None:
            return None
        try:
            return User.model_validate(raw)
        except ValidationError as e:
            logger.warning(
                "Stored session is malformed, ignoring it",
                key=self.current_user_key,
                error_count=e.error_count(),
            )
            return None

    def save_current_session(self, user: User) -> None:
        """Persist ``user`` as the signed-in user. Raises StorageError."""
        self._store.set(self.current_user_key, user.model_dump(mode="json"))

    def clear_current_session(self) -> None:
        """Remove the session record. Raises StorageError."""
        self._store.remove(self.current_user_key)

    @contextmanager
    def write_lock(self, timeout_seconds: float = LOCK_TIMEOUT_SECONDS) -> Generator[None, None, None]:
        """Serialize read-modify-write of the user list"""
        with self._store.lock(f"lock:{self.users_key}", timeout_seconds=timeout_seconds):
            yield
