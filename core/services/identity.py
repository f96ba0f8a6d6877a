"""Verified caller identity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """
    The authenticated caller, as asserted by the identity provider.

    Attributes:
        uid: Provider user id; becomes UserProfile.uid
        email: Verified account email, lower-cased; empty when the provider has none
    """

    uid: str
    email: str = ""

    @classmethod
    def from_claims(cls, claims: dict) -> "Identity":
        """Build from decoded token claims (`sub` or `user_id`, optional `email`)."""
        uid = claims.get("sub") or claims.get("user_id") or ""
        email = (claims.get("email") or "").strip().lower()
        return cls(uid=str(uid), email=email)
