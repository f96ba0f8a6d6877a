"""
Authentication dependencies for FastAPI routes.

Reads the bearer token from the Authorization header and resolves it to an
Identity. Routes receive the identity explicitly; nothing is stored globally.
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.errors import UnauthenticatedError
from core.logging import bind_context, get_logger
from core.services import Identity

from .identity import verify_token

logger = get_logger("auth")

bearer_scheme = HTTPBearer(auto_error=False)


def get_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Identity:
    """
    Require a valid bearer token.

    Raises:
        UnauthenticatedError: No token, or the token failed verification
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError()

    identity = verify_token(credentials.credentials)
    bind_context(uid=identity.uid)
    return identity


def get_optional_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Identity | None:
    """
    Identity if a valid token is present, otherwise None.

    An invalid token is logged and ignored so public reads keep working.
    """
    if credentials is None or not credentials.credentials:
        return None

    try:
        identity = verify_token(credentials.credentials)
    except UnauthenticatedError:
        logger.warning("optional_token_ignored")
        return None

    bind_context(uid=identity.uid)
    return identity
