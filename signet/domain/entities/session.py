from datetime import datetime  # For timestamp fields
from typing import Optional  # For optional fields
from uuid import uuid4  # For generating unique JWT IDs

from sqlalchemy import DateTime  # Explicit timezone-aware DateTime type
from sqlmodel import Column, Field, Index, SQLModel, String  # For ORM and table definition

from signet.domain.entities.user import as_utc, utcnow


class RefreshSession(SQLModel, table=True):
    """Server-side record of one issued refresh token.

    Access tokens are stateless; the refresh artifact is the only credential
    with server state. Each refresh token carries a unique `jti`; the session
    row keyed by that `jti` stores a SHA-256 fingerprint of the token, its
    expiry and, once rotated or logged out, the revocation time.

    Attributes:
        id: The unique identifier for the session record.
        jti: The unique JWT ID (claim 'jti') of the refresh token.
        user_id: A foreign key linking the session to the `User`.
        refresh_token_hash: SHA-256 hex digest of the encoded refresh token.
        created_at: The timestamp when the session was created.
        expires_at: The timestamp when the refresh token stops being valid.
        revoked_at: The timestamp when the session was revoked. Null while active.
    """

    __tablename__ = "refresh_sessions"

    id: Optional[int] = Field(
        default=None,
        primary_key=True,
        description="The unique identifier for the session record.",
    )
    jti: str = Field(
        default_factory=lambda: uuid4().hex,
        sa_column=Column(String(64), unique=True, nullable=False),
        description="Unique JWT ID (jti) of the refresh token.",
    )
    user_id: int = Field(
        foreign_key="users.id",
        index=True,
        nullable=False,
        description="Foreign key linking the session to the User.",
    )
    refresh_token_hash: str = Field(
        max_length=64,
        nullable=False,
        description="SHA-256 fingerprint of the refresh token.",
    )
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="The timestamp when the session was created.",
    )
    expires_at: datetime = Field(
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="The timestamp when the refresh token expires.",
    )
    revoked_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
        description="Timestamp of when the session was revoked. Null if active.",
    )

    __table_args__ = (
        Index("ix_refresh_sessions_user_id_expires_at", "user_id", "expires_at"),
        {"extend_existing": True},
    )

    def is_active(self, now: Optional[datetime] = None) -> bool:
        """True when the session is neither revoked nor expired."""
        now = now or utcnow()
        return self.revoked_at is None and as_utc(self.expires_at) > now
