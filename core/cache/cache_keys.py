"""
Cache key management.

Centralized cache key definitions to:
- Prevent key collisions
- Enable pattern-based invalidation
"""

import hashlib
import json


class CacheKeys:
    """
    Centralized cache key definitions.

    Naming convention: {domain}:{entity}:{subtype}

    Examples:
        - catalog:skills:<hash> -> One filtered skill listing page
        - catalog:categories:<hash> -> One category listing page
        - auth:firebase:certs -> Google token signing certificates
    """

    PREFIX_CATALOG = "catalog"
    PREFIX_AUTH = "auth"

    # TTLs (in seconds)
    TTL_MEDIUM = 60 * 30  # 30 minutes

    FIREBASE_CERTS = "auth:firebase:certs"

    @staticmethod
    def _digest(params: dict) -> str:
        raw = json.dumps(params, sort_keys=True, default=str)
        return hashlib.sha1(raw.encode("utf-8")).hexdigest()[:16]

    @staticmethod
    def skill_list(**params) -> str:
        """Cache key for one filtered page of skills."""
        return f"catalog:skills:{CacheKeys._digest(params)}"

    @staticmethod
    def category_list(**params) -> str:
        """Cache key for one page of skill categories."""
        return f"catalog:categories:{CacheKeys._digest(params)}"

    @staticmethod
    def catalog_pattern() -> str:
        """Pattern to match every catalog listing."""
        return "catalog:*"
