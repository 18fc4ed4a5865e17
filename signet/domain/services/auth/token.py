import hmac
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, TypedDict
from uuid import uuid4

from jwt import PyJWTError
from jwt import decode as jwt_decode
from jwt import encode as jwt_encode
from structlog import get_logger

from signet.core.config.settings import settings
from signet.core.exceptions import InvalidTokenError
from signet.core.logging import mask_token
from signet.domain.entities.session import RefreshSession
from signet.domain.entities.user import User
from signet.domain.interfaces.repositories import (
    IRefreshSessionRepository,
    IUserRepository,
)
from signet.domain.value_objects.jwt_token import AccessTokenClaims
from signet.utils.i18n import get_translated_message
from signet.utils.security import fingerprint_token

logger = get_logger(__name__)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class TokenPair(TypedDict):
    access_token: str
    refresh_token: str
    token_type: str
    expires_in: int


class TokenService:
    """Service for issuing, verifying, rotating and revoking JWTs.

    Access tokens are self-contained: they embed `sub`, `email`, `name` and
    `iat`, and are verified by signature, issuer, audience and expiry alone.
    Refresh tokens are JWTs too, but each one is backed by a `RefreshSession`
    row holding its SHA-256 fingerprint, so it can be rotated on use and
    revoked on logout.

    Attributes:
        user_repository: Used to reload the user when refreshing.
        session_repository: Stores refresh session rows.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        session_repository: IRefreshSessionRepository,
    ):
        self.user_repository = user_repository
        self.session_repository = session_repository

    @property
    def access_token_ttl(self) -> timedelta:
        return timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    @property
    def refresh_token_ttl(self) -> timedelta:
        return timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)

    def create_access_token(self, user: User) -> str:
        """Create a signed access token for `user`.

        Args:
            user (User): User for whom to create the token.

        Returns:
            str: Encoded JWT access token.
        """
        now = datetime.now(timezone.utc)
        jti = uuid4().hex
        payload = {
            "sub": str(user.id),
            "email": user.email,
            "name": user.name,
            "iss": settings.JWT_ISSUER,
            "aud": settings.JWT_AUDIENCE,
            "iat": now,
            "exp": now + self.access_token_ttl,
            "jti": jti,
            "type": ACCESS_TOKEN_TYPE,
        }
        token = self._encode(payload)
        logger.debug("access_token_created", user_id=user.id, jti=jti[:8] + "***")
        return token

    def decode_access_token(self, token: str, language: str = "en") -> AccessTokenClaims:
        """Verify an access token and return its claims.

        Verification is stateless. Revoking a refresh session does not
        invalidate access tokens already issued from it; they expire on their
        own.

        Raises:
            InvalidTokenError: If the token is malformed, forged, expired, or
                not an access token.
        """
        try:
            payload = self._decode(token)
            claims = AccessTokenClaims.from_payload(payload)
        except (PyJWTError, ValueError) as e:
            logger.warning("access_token_rejected", error=str(e), token=mask_token(token))
            raise InvalidTokenError(get_translated_message("invalid_token", language)) from e
        return claims

    async def create_refresh_token(self, user: User) -> str:
        """Create a refresh token and persist its session row.

        Only the SHA-256 fingerprint of the encoded token is stored.

        Args:
            user (User): User for whom to create the token.

        Returns:
            str: Encoded JWT refresh token.
        """
        now = datetime.now(timezone.utc)
        expires_at = now + self.refresh_token_ttl
        jti = uuid4().hex
        payload = {
            "sub": str(user.id),
            "iss": settings.JWT_ISSUER,
            "aud": settings.JWT_AUDIENCE,
            "iat": now,
            "exp": expires_at,
            "jti": jti,
            "type": REFRESH_TOKEN_TYPE,
        }
        refresh_token = self._encode(payload)
        await self.session_repository.add(
            RefreshSession(
                jti=jti,
                user_id=user.id,
                refresh_token_hash=fingerprint_token(refresh_token),
                created_at=now,
                expires_at=expires_at,
            )
        )
        logger.debug("refresh_token_created", user_id=user.id, jti=jti[:8] + "***")
        return refresh_token

    async def issue_tokens(self, user: User) -> TokenPair:
        """Issue a fresh access/refresh pair, as done at login."""
        return {
            "access_token": self.create_access_token(user),
            "refresh_token": await self.create_refresh_token(user),
            "token_type": "bearer",
            "expires_in": int(self.access_token_ttl.total_seconds()),
        }

    async def refresh_tokens(self, refresh_token: str, language: str = "en") -> TokenPair:
        """Exchange a refresh token for a new access token, rotating it.

        The presented token must verify, be of type `refresh`, match an
        active session row by `jti` and fingerprint, and belong to an active
        user. Its session is then revoked and a new pair is issued, so every
        refresh token is usable exactly once.

        Args:
            refresh_token (str): Current refresh token.
            language (str): Language for error messages (defaults to 'en').

        Returns:
            TokenPair: The new access and refresh tokens with metadata.

        Raises:
            InvalidTokenError: If the refresh token is invalid, expired,
                revoked, or belongs to an inactive user.
        """
        invalid = InvalidTokenError(get_translated_message("invalid_refresh_token", language))

        try:
            payload = self._decode(refresh_token)
        except PyJWTError as e:
            logger.warning("refresh_token_decode_failed", error=str(e))
            raise invalid from e
        if payload.get("type") != REFRESH_TOKEN_TYPE:
            logger.warning("refresh_token_wrong_type", token_type=payload.get("type"))
            raise invalid

        jti = payload["jti"]
        session = await self.session_repository.get_by_jti(jti)
        if session is None or not hmac.compare_digest(
            session.refresh_token_hash, fingerprint_token(refresh_token)
        ):
            logger.warning("refresh_session_not_found", jti=jti[:8] + "***")
            raise invalid
        if not session.is_active():
            logger.warning(
                "refresh_session_inactive",
                jti=jti[:8] + "***",
                user_id=session.user_id,
                revoked=session.revoked_at is not None,
            )
            raise invalid

        user = await self.user_repository.get_by_id(session.user_id)
        if user is None or not user.is_active:
            logger.warning("inactive_user_refresh_attempt", user_id=session.user_id)
            raise InvalidTokenError(get_translated_message("user_account_inactive", language))

        # A concurrent rotation of the same token loses here.
        if not await self.session_repository.revoke(jti):
            logger.warning("refresh_session_already_rotated", jti=jti[:8] + "***")
            raise invalid

        tokens = await self.issue_tokens(user)
        logger.info("tokens_refreshed", user_id=user.id)
        return tokens

    async def revoke_refresh_token(self, refresh_token: str) -> bool:
        """Revoke the session behind `refresh_token`, if it is valid.

        Invalid, expired or unknown tokens are ignored: logout always
        succeeds from the caller's point of view.

        Returns:
            True if a session was revoked.
        """
        try:
            payload = self._decode(refresh_token, verify_exp=False)
        except PyJWTError as e:
            logger.debug("refresh_token_revoke_skipped", error=str(e))
            return False
        if payload.get("type") != REFRESH_TOKEN_TYPE:
            return False

        session = await self.session_repository.get_by_jti(payload["jti"])
        if session is None or not hmac.compare_digest(
            session.refresh_token_hash, fingerprint_token(refresh_token)
        ):
            return False
        revoked = await self.session_repository.revoke(session.jti)
        logger.info("refresh_token_revoked", user_id=session.user_id, revoked=revoked)
        return revoked

    @staticmethod
    def _encode(payload: Dict[str, Any]) -> str:
        return jwt_encode(
            payload,
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )

    @staticmethod
    def _decode(token: str, verify_exp: bool = True) -> Dict[str, Any]:
        options: Dict[str, Any] = {"require": ["sub", "iat", "exp", "jti", "iss", "aud"]}
        if not verify_exp:
            options["verify_exp"] = False
        return jwt_decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
            issuer=settings.JWT_ISSUER,
            audience=settings.JWT_AUDIENCE,
            options=options,
        )
