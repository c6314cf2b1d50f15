"""
Bearer token verification.

Tokens are HS256 JWTs signed with the server-held secret and carry
at least a ``role`` claim.
"""

from typing import Any, Dict

import jwt

DEFAULT_ALGORITHM = "HS256"


def decode_access_token(*, token: str, secret: str, algorithm: str = DEFAULT_ALGORITHM) -> Dict[str, Any]:
    """Verify signature and expiry and return the claims.

    Raises jwt.InvalidTokenError (or a subclass such as ExpiredSignatureError)
    when the token cannot be trusted.
    """
    if not token:
        raise jwt.InvalidTokenError("token_blank")
    if not secret:
        raise ValueError("jwt_secret_blank")
    return jwt.decode(token, secret, algorithms=[algorithm])
