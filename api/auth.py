"""
Admin gate for mutating endpoints.

Every POST/PUT/DELETE on the movie lobby must carry
``Authorization: Bearer <jwt>`` whose ``role`` claim is ``admin``.
"""

import logging
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, Header
from fastapi.security.utils import get_authorization_scheme_param

from api.dependencies import get_config
from api.exceptions import ForbiddenError, UnauthenticatedError
from movie_lobby.config import Config
from movie_lobby.security import DEFAULT_ALGORITHM, decode_access_token

logger = logging.getLogger("api.auth")

ADMIN_ROLE = "admin"


def authenticate(
    authorization: Optional[str],
    secret: str,
    algorithm: str = DEFAULT_ALGORITHM,
) -> Dict[str, Any]:
    """
    Check an Authorization header and return the verified claims.

    Raises:
        UnauthenticatedError: No bearer token, or the token fails verification.
        ForbiddenError: The token is valid but its role is not admin.
    """
    scheme, token = get_authorization_scheme_param(authorization)
    if scheme.lower() != "bearer" or not token:
        logger.warning("Rejected request: missing bearer token")
        raise UnauthenticatedError()

    try:
        claims = decode_access_token(token=token, secret=secret, algorithm=algorithm)
    except jwt.ExpiredSignatureError:
        logger.warning("Rejected request: token expired")
        raise UnauthenticatedError()
    except jwt.InvalidTokenError as e:
        logger.warning(f"Rejected request: invalid token ({type(e).__name__})")
        raise UnauthenticatedError()

    if claims.get("role") != ADMIN_ROLE:
        logger.warning(f"Rejected request: role={claims.get('role')!r} is not admin")
        raise ForbiddenError()

    return claims


def require_admin(
    authorization: Optional[str] = Header(None),
    config: Config = Depends(get_config),
) -> Dict[str, Any]:
    """FastAPI dependency guarding admin-only routes."""
    return authenticate(authorization, config.jwt_secret, config.jwt_algorithm)
