"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .cached_object import CachedObject, compute_content_hash
from .origin_response import OriginResponse

__all__ = ["CachedObject", "OriginResponse", "compute_content_hash"]
