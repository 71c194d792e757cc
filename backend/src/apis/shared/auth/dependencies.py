"""FastAPI dependencies for authentication."""

import logging
import os
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from .jwt_validator import get_validator
from .models import User

logger = logging.getLogger(__name__)

# HTTP Bearer token security scheme with auto_error=False to handle missing tokens manually
security = HTTPBearer(auto_error=False)

# Check if authentication is enabled (defaults to true for security)
ENABLE_AUTHENTICATION = os.environ.get('ENABLE_AUTHENTICATION', 'true').lower() == 'true'


def _development_user() -> User:
    """Console user returned for every request when authentication is disabled."""
    admin_role = os.getenv('CONSOLE_ADMIN_ROLES', 'adminRole').split(',')[0].strip()
    return User(
        email="admin@local.dev",
        user_id="local-admin",
        name="Local Administrator",
        roles=[admin_role],
        picture=None
    )


def _validate_credentials(credentials: HTTPAuthorizationCredentials) -> User:
    validator = get_validator()

    # Validator should always be available when auth is enabled
    if validator is None:
        logger.error("Validator is None but authentication is enabled - check CONSOLE_JWT_SECRET")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Authentication service misconfigured."
        )

    try:
        return validator.validate_token(credentials.credentials)
    except HTTPException:
        # Re-raise HTTPExceptions (401 for invalid tokens)
        raise
    except Exception as e:
        logger.error(f"Unexpected error in authentication: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication failed."
        )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> User:
    """
    FastAPI dependency to get the current authenticated user.

    Extracts Bearer token from Authorization header and validates it.

    When ENABLE_AUTHENTICATION=false, bypasses authentication and returns
    a local administrator. This should only be used in development/testing.

    Args:
        credentials: HTTP Bearer token credentials (None if missing)

    Returns:
        User object with authenticated user information

    Raises:
        HTTPException: 401 if token is missing or invalid (when auth enabled)
    """
    if not ENABLE_AUTHENTICATION:
        logger.warning("Authentication is DISABLED via ENABLE_AUTHENTICATION=false - returning local admin")
        return _development_user()

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required. Please provide a valid Bearer token in the Authorization header.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return _validate_credentials(credentials)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[User]:
    """
    FastAPI dependency for endpoints that also accept anonymous callers.

    Returns None when no Bearer token is sent. A token that is sent but
    invalid is still rejected with 401.
    """
    if not ENABLE_AUTHENTICATION:
        return _development_user()

    if credentials is None:
        return None

    return _validate_credentials(credentials)
