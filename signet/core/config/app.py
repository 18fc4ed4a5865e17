"""
Application-specific settings.
"""
from typing import List, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """
    Defines application-wide settings like project name, debug mode, and CORS origins.

    Security Note:
        - ALLOWED_ORIGINS must list the exact origins of the browser clients.
          Credentials (the refresh cookie) are allowed for these origins only,
          so a wildcard is never acceptable here.
    """
    PROJECT_NAME: str = "signet"
    VERSION: str = "0.1.0"
    DESCRIPTION: str = "Email/password registration and login with refreshable access tokens."
    APP_ENV: str = "development"
    DEBUG: bool = False

    API_HOST: str = "0.0.0.0"
    API_PORT: int = Field(ge=1, le=65535, default=4000)
    API_WORKERS: int = Field(ge=1, default=1)
    RELOAD: bool = False

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    ALLOWED_ORIGINS: Union[str, List[str]] = Field(default="http://localhost:5000")
    DEFAULT_LANGUAGE: str = "en"
    SUPPORTED_LANGUAGES: Union[str, List[str]] = Field(default=["en", "es"])

    @field_validator("ALLOWED_ORIGINS", "SUPPORTED_LANGUAGES", mode="before")
    @classmethod
    def split_comma_separated(cls, v: Union[str, List[str]]) -> List[str]:
        """
        Splits a comma-separated string into a list.

        Args:
            v: Input value as a string or list.

        Returns:
            List of stripped, non-empty strings.
        """
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        return v
