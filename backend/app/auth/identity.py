"""
Bearer token verification.

AUTH_PROVIDER=firebase verifies Firebase ID tokens (RS256) against Google's
published x509 certificates; AUTH_PROVIDER=jwt verifies locally signed
HS256 tokens. Both yield an Identity(uid, email).
"""

from typing import Any

import httpx
from jose import JWTError, jwt

from core.cache import CacheKeys, cached
from core.errors import UnauthenticatedError, UnavailableError
from core.logging import get_logger
from core.services import Identity

from ..config import get_settings
from .jwt import decode_access_token

logger = get_logger("auth")

FIREBASE_ISSUER_PREFIX = "https://securetoken.google.com/"
CERTS_FETCH_TIMEOUT = 5.0


@cached(CacheKeys.FIREBASE_CERTS, ttl=lambda: get_settings().firebase_certs_ttl)
def fetch_signing_certs() -> dict[str, str]:
    """
    Google's current token signing certificates, keyed by key id.

    Cached in Redis when available; fetched on every call otherwise.

    Raises:
        UnavailableError: The certificate endpoint could not be reached
    """
    settings = get_settings()
    try:
        with httpx.Client(timeout=CERTS_FETCH_TIMEOUT) as client:
            response = client.get(settings.firebase_certs_url)
            response.raise_for_status()
            certs = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.error("firebase_certs_fetch_failed", error=str(exc), error_type=type(exc).__name__)
        raise UnavailableError() from exc

    logger.debug("firebase_certs_fetched", keys=len(certs))
    return certs


def verify_firebase_token(token: str) -> dict[str, Any]:
    """
    Verify a Firebase ID token.

    Checks the RS256 signature against the certificate named by the header
    kid, plus expiry, audience (project id) and issuer.

    Raises:
        ValueError: The token is malformed, expired or not for this project
    """
    settings = get_settings()
    try:
        header = jwt.get_unverified_header(token)
    except JWTError as exc:
        raise ValueError("Malformed token") from exc

    if header.get("alg") != "RS256":
        raise ValueError("Unexpected signing algorithm")

    cert = fetch_signing_certs().get(header.get("kid", ""))
    if cert is None:
        raise ValueError("Unknown signing key")

    try:
        return jwt.decode(
            token,
            cert,
            algorithms=["RS256"],
            audience=settings.firebase_project_id,
            issuer=f"{FIREBASE_ISSUER_PREFIX}{settings.firebase_project_id}",
            options={"verify_at_hash": False},
        )
    except JWTError as exc:
        raise ValueError("Invalid token") from exc


def verify_token(token: str) -> Identity:
    """
    Resolve a bearer token to the caller's identity.

    Raises:
        UnauthenticatedError: The token failed verification
        UnavailableError: Signing keys could not be loaded
    """
    settings = get_settings()
    try:
        if settings.auth_provider == "firebase":
            claims = verify_firebase_token(token)
        else:
            claims = decode_access_token(token)
    except ValueError as exc:
        logger.warning("token_rejected", provider=settings.auth_provider, reason=str(exc))
        raise UnauthenticatedError("Invalid or expired token") from exc

    identity = Identity.from_claims(claims)
    if not identity.uid:
        logger.warning("token_rejected", provider=settings.auth_provider, reason="missing subject")
        raise UnauthenticatedError("Invalid or expired token")
    return identity
