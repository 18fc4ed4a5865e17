"""
Settings used by the command line client.
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """
    Defines where the client finds the API and where it keeps credentials.

    The client instantiates this class on its own, so it runs without the
    server's secrets (JWT_SECRET, DATABASE_URL) being configured.

    Security Note:
        - CLIENT_TOKEN_FILE holds a live access token and refresh token. The
          file is created with owner-only permissions.
    """
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    API_URL: str = "http://localhost:4000/authentication"
    CLIENT_TOKEN_FILE: str = "~/.signet/tokens.json"
    CLIENT_TIMEOUT_SECONDS: float = Field(gt=0, default=10.0)
