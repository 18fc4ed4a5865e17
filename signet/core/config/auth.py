"""Authentication settings: token signing, lifetimes and password hashing.
"""

import logging
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class AuthSettings(BaseSettings):
    """Defines settings for JWT issuing and refresh cookie handling.

    Security Note:
        - JWT_SECRET signs every access and refresh token. It must be a random
          string of at least 32 characters and never be committed or logged.
        - REFRESH_COOKIE_SECURE must be enabled whenever the API is served over
          HTTPS so the refresh artifact never travels in clear text.
    """

    JWT_SECRET: SecretStr = SecretStr("")
    JWT_ALGORITHM: str = "HS256"
    JWT_ISSUER: str = "signet"
    JWT_AUDIENCE: str = "signet:api"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(ge=1, default=60)
    REFRESH_TOKEN_EXPIRE_DAYS: int = Field(ge=1, default=7)

    BCRYPT_ROUNDS: int = Field(ge=4, le=31, default=10)
    PASSWORD_MIN_LENGTH: int = Field(ge=1, default=8)

    REFRESH_COOKIE_NAME: str = "refreshToken"
    REFRESH_COOKIE_PATH: str = "/"
    REFRESH_COOKIE_SECURE: bool = False
    REFRESH_COOKIE_SAMESITE: Literal["lax", "strict", "none"] = "lax"

    @model_validator(mode="after")
    def _validate_jwt_secret(self) -> "AuthSettings":
        """Rejects a missing or short signing secret.

        Raises:
            ValueError: If the secret is shorter than 32 characters.
        """
        if len(self.JWT_SECRET.get_secret_value()) < 32:
            error_msg = "JWT_SECRET must be set and at least 32 characters long."
            logger.error(error_msg)
            raise ValueError(error_msg)
        return self
