from datetime import datetime, timezone  # For timestamp fields
from typing import Optional  # For optional fields

from sqlalchemy import DateTime  # Explicit timezone-aware DateTime type
from sqlmodel import Column, Field, SQLModel, String  # For ORM and table definition


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from databases without tz support."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class User(SQLModel, table=True):
    """Represents a registered account and acts as the Aggregate Root.

    The record is the single document per user: identity, optional display
    name and the bcrypt hash of the password. The plaintext password is never
    stored, and the hash never leaves the service in a response.

    Attributes:
        id: The unique identifier for the user (primary key, token subject).
        email: A unique, lowercase email address used to log in.
        name: Optional display name.
        hashed_password: The bcrypt hash of the password.
        is_active: Inactive users cannot log in or refresh.
        created_at: The timestamp of when the account was created.
        updated_at: The timestamp of the last update to the record.
    """

    __tablename__ = "users"  # Explicit table name for clarity

    id: Optional[int] = Field(
        default=None,  # Auto-incremented by database
        primary_key=True,
        description="The unique identifier for the user.",
    )
    email: str = Field(
        sa_column=Column(String(254), unique=True, index=True, nullable=False),
        description="Unique, lowercase email address used to log in.",
    )
    name: Optional[str] = Field(
        default=None,
        max_length=100,
        description="Optional display name.",
    )
    hashed_password: str = Field(
        max_length=255,  # Sufficient for bcrypt hashes
        description="Bcrypt-hashed password.",
    )
    is_active: bool = Field(
        default=True,
        description="Indicates if the account is active. Inactive users cannot log in.",
    )
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="The timestamp of when the user account was created.",
    )
    updated_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
        description="The timestamp of the last update to the user's record.",
    )

    __table_args__ = ({"extend_existing": True},)
