"""Utility modules for the HTTP boundary."""

from .content_response import quote_etag, serve_content
from .url_target import FALLBACK_SCHEME, parse_target_url

__all__ = [
    "FALLBACK_SCHEME",
    "parse_target_url",
    "quote_etag",
    "serve_content",
]
