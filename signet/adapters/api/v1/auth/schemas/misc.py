"""Generic response models shared by several endpoints."""

from __future__ import annotations

from datetime import datetime

from signet.adapters.api.v1.auth.schemas.base import CamelModel


class MessageResponse(CamelModel):
    """A human-readable confirmation with the server time."""

    message: str
    timestamp: datetime
