"""
JWT signing for the two token kinds.

Access and refresh tokens are minted and verified by two independent
TokenSigner instances, each holding its own secret. A token signed by one
signer never verifies with the other.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from jose import ExpiredSignatureError, JWTError, jwt

from config import ApplicationConfig

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class TokenError(Exception):
    """Base class for token verification failures"""


class TokenExpiredError(TokenError):
    """Signature is valid but the token is past its exp claim"""


class InvalidTokenError(TokenError):
    """Malformed token, bad signature or wrong token type"""


class TokenSigner:
    """
    Mints and verifies one kind of JWT (HS256).

    Args:
        secret: Signing secret, never shared with another signer
        expires_delta: Default token lifetime
        token_type: Value of the `type` claim this signer emits and accepts
    """

    algorithm = "HS256"

    def __init__(self, secret: str, expires_delta: timedelta, token_type: str):
        if not secret:
            raise ValueError(f"{token_type} token secret must not be empty")
        self._secret = secret
        self.expires_delta = expires_delta
        self.token_type = token_type

    def sign(
        self, claims: Dict[str, Any], expires_delta: Optional[timedelta] = None
    ) -> str:
        now = datetime.now(UTC)
        payload = {
            **claims,
            "type": self.token_type,
            # Two tokens minted in the same second must still differ
            "jti": uuid4().hex,
            "iat": now,
            "exp": now + (expires_delta if expires_delta is not None else self.expires_delta),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """
        Verify signature and expiry.

        Raises:
            TokenExpiredError: signature valid, token expired
            InvalidTokenError: anything else
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as exc:
            raise TokenExpiredError(str(exc)) from exc
        except JWTError as exc:
            raise InvalidTokenError(str(exc)) from exc
        return self._check_type(payload)

    def verify_ignoring_expiry(self, token: str) -> Dict[str, Any]:
        """Verify the signature only; used to identify the session of an expired token"""
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            raise InvalidTokenError(str(exc)) from exc
        return self._check_type(payload)

    def _check_type(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        # Tokens issued before the type claim existed carry none
        if payload.get("type", self.token_type) != self.token_type:
            raise InvalidTokenError(f"Expected a {self.token_type} token")
        if claims_user_id(payload) is None:
            raise InvalidTokenError("Token carries no user id")
        return payload


def claims_user_id(payload: Dict[str, Any]) -> Optional[UUID]:
    """
    User id from token claims.

    `user_id` is the only claim name minted; the legacy `id` claim is still
    read so tokens from older issuers keep verifying until they expire.
    """
    raw = payload.get("user_id") or payload.get("id")
    if raw is None:
        return None
    try:
        return UUID(str(raw))
    except ValueError:
        return None


def claims_session_id(payload: Dict[str, Any]) -> Optional[UUID]:
    raw = payload.get("sid")
    if raw is None:
        return None
    try:
        return UUID(str(raw))
    except ValueError:
        return None


if ApplicationConfig.ACCESS_TOKEN_SECRET == ApplicationConfig.REFRESH_TOKEN_SECRET:
    raise RuntimeError("ACCESS_TOKEN_SECRET and REFRESH_TOKEN_SECRET must differ")

access_token_signer = TokenSigner(
    ApplicationConfig.ACCESS_TOKEN_SECRET,
    timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_TTL_MINUTES),
    ACCESS_TOKEN_TYPE,
)

refresh_token_signer = TokenSigner(
    ApplicationConfig.REFRESH_TOKEN_SECRET,
    timedelta(days=ApplicationConfig.REFRESH_TOKEN_TTL_DAYS),
    REFRESH_TOKEN_TYPE,
)
