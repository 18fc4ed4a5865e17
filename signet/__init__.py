"""signet: email/password registration and login service with a refresh-aware client."""

__version__ = "0.1.0"
