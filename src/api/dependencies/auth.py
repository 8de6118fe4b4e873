"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenClaims

# Security scheme for OpenAPI docs
security = HTTPBearer(auto_error=False)

# Singleton auth provider
_auth_provider: JWTAuthProvider | None = None


def get_auth_provider() -> JWTAuthProvider:
    """Get or create the auth provider singleton."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = JWTAuthProvider()
    return _auth_provider


def _extract_token(
    credentials: HTTPAuthorizationCredentials | None,
    x_auth_token: str | None,
) -> str | None:
    """Bearer credentials first, then the legacy ``x-auth-token`` header."""
    if credentials and credentials.credentials:
        return credentials.credentials
    if x_auth_token and x_auth_token.strip():
        return x_auth_token.strip()
    return None


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
    x_auth_token: Annotated[str | None, Header()] = None,
) -> TokenClaims:
    """
    Dependency to get the identity of the authenticated caller.

    Verification is stateless: the user store is not consulted.

    Raises:
        AuthenticationError: If no token provided or token is invalid
    """
    token = _extract_token(credentials, x_auth_token)
    if not token:
        raise AuthenticationError(
            message="Authorization header required",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    claims = auth_provider.validate_token(token)

    if not claims:
        raise AuthenticationError(
            message="Invalid or expired token",
            error_code=ErrorCode.INVALID_TOKEN,
        )

    return claims


# Type alias for convenience in route handlers
CurrentUser = Annotated[TokenClaims, Depends(get_current_user)]
