from .token import TokenPair, TokenService

__all__ = ["TokenService", "TokenPair"]
