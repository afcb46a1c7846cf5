"""
Route gate for protected endpoints.

Routers built with ``route_class=ProtectedRoute`` verify the bearer token
before FastAPI reads or validates the request, so a request without a valid
token is always rejected as unauthenticated, whatever its body looks like.
"""

from typing import Any, Callable, Dict, Optional

from fastapi import Depends, Request, Response
from fastapi.routing import APIRoute
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from fastapi.security.utils import get_authorization_scheme_param

from livraria.auth.tokens import InvalidTokenError
from livraria.errors import AuthenticationError, ValidationError
from livraria.logger import get_logger
from livraria.schemas import TokenClaims
from livraria.validation import validate

logger = get_logger(__name__)

NOT_LOGGED_IN = "Você precisa estar logado."

# documents the bearer requirement in OpenAPI; the gate does the actual check
bearer_scheme = HTTPBearer(auto_error=False)


def extract_bearer_token(request: Request) -> str:
    scheme, credentials = get_authorization_scheme_param(request.headers.get("Authorization"))
    if scheme.lower() != "bearer" or not credentials:
        logger.warning("Bearer token missing", path=request.url.path, scheme=scheme or None)
        raise AuthenticationError(NOT_LOGGED_IN)
    return credentials


def authenticate(request: Request) -> Dict[str, Any]:
    """Verify the request's bearer token and return its claims."""
    token = extract_bearer_token(request)
    try:
        claims = request.app.state.tokens.verify(token)
    except InvalidTokenError as e:
        logger.warning("Token rejected", path=request.url.path, reason=str(e))
        raise AuthenticationError(NOT_LOGGED_IN)

    # a correctly signed token still has to carry the identity the handlers read
    try:
        validate(TokenClaims, claims)
    except ValidationError as e:
        logger.warning("Token claims incomplete", path=request.url.path, violations=e.violations)
        raise AuthenticationError(NOT_LOGGED_IN)
    return claims


class ProtectedRoute(APIRoute):
    """APIRoute that authenticates before the endpoint's own request handling."""

    def get_route_handler(self) -> Callable:
        route_handler = super().get_route_handler()

        async def gated_route_handler(request: Request) -> Response:
            request.state.claims = authenticate(request)
            return await route_handler(request)

        return gated_route_handler


def get_current_claims(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Dict[str, Any]:
    """Claims attached by the gate. Only meaningful on protected routes."""
    claims = getattr(request.state, "claims", None)
    if claims is None:
        raise AuthenticationError(NOT_LOGGED_IN)
    return claims
