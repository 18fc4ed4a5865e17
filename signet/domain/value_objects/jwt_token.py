"""JWT token value objects.

`AccessTokenClaims` is the verified content of an access token as the
profile route sees it. Verification is stateless: a token is valid if its
signature, issuer, audience, type and expiry check out.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, ClassVar, Dict, Optional


@dataclass(frozen=True)
class AccessTokenClaims:
    """Verified claims of an access token.

    Attributes:
        sub: Subject, the user's id as a string.
        email: The user's email at issue time.
        name: The user's display name at issue time, if any.
        iat: Issued-at, seconds since the epoch.
        exp: Expiry, seconds since the epoch.
        jti: Unique token id.
    """

    sub: str
    email: str
    name: Optional[str]
    iat: int
    exp: int
    jti: str

    REQUIRED_CLAIMS: ClassVar[frozenset] = frozenset({"sub", "email", "iat", "exp", "jti"})
    TOKEN_TYPE: ClassVar[str] = "access"

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "AccessTokenClaims":
        """Build claims from a decoded JWT payload.

        Raises:
            ValueError: If required claims are missing or the token type is wrong.
        """
        missing = cls.REQUIRED_CLAIMS - set(payload)
        if missing:
            raise ValueError(f"Missing required claims: {sorted(missing)}")
        if payload.get("type") != cls.TOKEN_TYPE:
            raise ValueError("Token is not an access token")
        if not payload["sub"]:
            raise ValueError("Token subject cannot be empty")
        return cls(
            sub=str(payload["sub"]),
            email=payload["email"],
            name=payload.get("name"),
            iat=int(payload["iat"]),
            exp=int(payload["exp"]),
            jti=payload["jti"],
        )

    @property
    def user_id(self) -> int:
        return int(self.sub)

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.exp, tz=timezone.utc)

    def to_public_dict(self) -> Dict[str, Any]:
        """The subset of claims echoed back to the caller by /profile."""
        return {"sub": self.sub, "email": self.email, "name": self.name, "iat": self.iat}
