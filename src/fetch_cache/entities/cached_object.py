"""Cached object domain entity."""

import hashlib
from dataclasses import dataclass
from datetime import datetime, timedelta


def compute_content_hash(body: bytes) -> str:
    """Return the hex MD5 digest of ``body``, used as the entity tag."""
    return hashlib.md5(body).hexdigest()


@dataclass(frozen=True)
class CachedObject:
    """Domain entity for one fetched resource snapshot.

    Instances are never mutated; a refresh stores a new object in place of
    the old one.

    Attributes:
        content_hash: Hex digest of ``body``, exposed to clients as the ETag
        content_type: MIME type reported by the origin ("" when absent)
        body: Resource payload at fetch time
        fetched_at: When the fetch completed (UTC), exposed as Last-Modified
        expires_at: ``fetched_at`` plus the cache TTL
    """

    content_hash: str
    content_type: str
    body: bytes
    fetched_at: datetime
    expires_at: datetime

    @classmethod
    def from_body(
        cls,
        body: bytes,
        content_type: str,
        fetched_at: datetime,
        ttl: timedelta,
    ) -> "CachedObject":
        """Build a snapshot, deriving the digest and expiry from the inputs."""
        return cls(
            content_hash=compute_content_hash(body),
            content_type=content_type,
            body=body,
            fetched_at=fetched_at,
            expires_at=fetched_at + ttl,
        )

    def is_fresh(self, now: datetime) -> bool:
        """Check whether the snapshot may still be served at ``now``."""
        return now < self.expires_at
