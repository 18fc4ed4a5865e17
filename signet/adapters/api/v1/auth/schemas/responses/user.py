"""Response Pydantic model for user data."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from signet.adapters.api.v1.auth.schemas.base import CamelModel
from signet.domain.entities.user import User, as_utc


class UserOut(CamelModel):
    """Serialised representation of :class:`~signet.domain.entities.user.User`.

    The password hash is never part of it.
    """

    id: int
    email: str
    name: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, user: User) -> "UserOut":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            created_at=as_utc(user.created_at),
            updated_at=as_utc(user.updated_at) if user.updated_at else None,
        )
