"""
Signed, expiring bearer tokens (JWT).
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60


class InvalidTokenError(Exception):
    """Token is malformed, tampered with, signed with another key or expired."""


class TokenService:
    """
    Issues and verifies tokens with a server-held secret.

    Verification is self-contained: there is no session store and no
    revocation list.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = ALGORITHM,
        ttl: timedelta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, claims: Dict[str, Any], ttl: Optional[timedelta] = None) -> str:
        """
        Create a token carrying ``claims`` plus ``iat`` and ``exp``.

        Args:
            claims: Payload to embed (e.g. the user id and email)
            ttl: Lifetime override; defaults to the service TTL

        Returns:
            Encoded token string
        """
        now = datetime.now(timezone.utc)
        expire = now + (ttl if ttl is not None else self.ttl)
        to_encode = dict(claims)
        to_encode.update({"iat": int(now.timestamp()), "exp": int(expire.timestamp())})
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """
        Check signature and expiry and return the embedded claims.

        Raises:
            InvalidTokenError: If the token cannot be trusted
        """
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require_exp": True, "require_iat": True},
            )
        except JWTError as e:
            raise InvalidTokenError(str(e)) from e
