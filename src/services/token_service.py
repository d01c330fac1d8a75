"""Token issuer: signed, time-limited bearer tokens (JWT, HS256)."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"


@dataclass(frozen=True)
class TokenClaims:
    """Identity asserted by a verified token.

    ``is_admin`` is a snapshot from issuance time. Privileged decisions
    re-read the live account instead of trusting it.
    """
    account_id: str
    is_admin: bool
    issued_at: datetime
    expires_at: datetime


class TokenIssuer:
    def __init__(self, secret: str, ttl: timedelta, algorithm: str = JWT_ALGORITHM):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self._ttl = ttl
        self._algorithm = algorithm

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, account_id: str, is_admin: bool) -> str:
        """Create a signed access token for an account."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": account_id,
            "is_admin": bool(is_admin),
            "iat": now,
            "exp": now + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims | None:
        """Verify signature and expiry and return the claims.

        Returns None for every kind of failure (forged, malformed, expired)
        so callers cannot tell them apart.
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            return None

        account_id = payload.get("sub")
        if not isinstance(account_id, str) or not account_id:
            return None

        try:
            return TokenClaims(
                account_id=account_id,
                is_admin=bool(payload.get("is_admin", False)),
                issued_at=datetime.fromtimestamp(int(payload["iat"]), tz=timezone.utc),
                expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc),
            )
        except (KeyError, TypeError, ValueError):
            return None
