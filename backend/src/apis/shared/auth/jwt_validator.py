"""JWT token validation for console access tokens."""

import logging
import os
from typing import List, Optional
import jwt
from fastapi import HTTPException, status

from .models import User

logger = logging.getLogger(__name__)


class ConsoleJWTValidator:
    """Validates HS256 JWT tokens issued for the blog console."""

    def __init__(
        self,
        secret: Optional[str] = None,
        audience: Optional[str] = None,
        algorithms: Optional[List[str]] = None
    ):
        """Initialize validator with configuration from environment."""
        self.secret = secret or os.getenv('CONSOLE_JWT_SECRET')
        self.audience = audience or os.getenv('CONSOLE_JWT_AUDIENCE', 'blog-console')
        self.algorithms = algorithms or ['HS256']

        if not self.secret:
            raise ValueError("CONSOLE_JWT_SECRET environment variable is required")

    def validate_token(self, token: str) -> User:
        """
        Validate a JWT token and extract user information.

        Args:
            token: Encoded JWT (without the "Bearer " prefix)

        Returns:
            User object built from the token claims

        Raises:
            HTTPException: 401 if the token is expired or invalid
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=self.algorithms,
                audience=self.audience,
                options={"require": ["sub", "exp"]}
            )
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired console token")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Token has expired.",
                headers={"WWW-Authenticate": "Bearer"},
            )
        except jwt.InvalidTokenError as e:
            logger.warning(f"Rejected invalid console token: {e}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token.",
                headers={"WWW-Authenticate": "Bearer"},
            )

        roles = payload.get('roles') or []
        if isinstance(roles, str):
            roles = [roles]

        return User(
            email=payload.get('email', ''),
            user_id=payload['sub'],
            name=payload.get('name', ''),
            roles=list(roles),
            picture=payload.get('picture')
        )


_validator: Optional[ConsoleJWTValidator] = None


def get_validator() -> Optional[ConsoleJWTValidator]:
    """Get the shared validator, or None when it cannot be configured."""
    global _validator
    if _validator is None:
        try:
            _validator = ConsoleJWTValidator()
        except ValueError as e:
            logger.error(f"Console JWT validator not configured: {e}")
            return None
    return _validator
