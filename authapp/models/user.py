"""User data model for authentication"""

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(BaseModel):
    """Registered account. Created only by signup, never updated."""

    model_config = ConfigDict(frozen=True)  # Immutable once created

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)  # Stored as entered; compared case-insensitively
    password_hash: str = Field(min_length=1)
    created_at: datetime = Field(default_factory=_utcnow)

    def has_email(self, email: str) -> bool:
        """Case-insensitive email comparison"""
        return self.email.lower() == email.lower()
