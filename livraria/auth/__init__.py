from .hashing import hash_password, verify_password
from .tokens import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    ALGORITHM,
    InvalidTokenError,
    TokenService,
)
from .gate import (
    NOT_LOGGED_IN,
    ProtectedRoute,
    authenticate,
    bearer_scheme,
    get_current_claims,
)

__all__ = [
    "hash_password",
    "verify_password",
    "ACCESS_TOKEN_EXPIRE_MINUTES",
    "ALGORITHM",
    "InvalidTokenError",
    "TokenService",
    "NOT_LOGGED_IN",
    "ProtectedRoute",
    "authenticate",
    "bearer_scheme",
    "get_current_claims",
]
