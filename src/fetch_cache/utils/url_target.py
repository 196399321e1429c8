"""Parsing of the ``url`` query parameter into (origin, resource)."""

from fetch_cache.exceptions import InvalidTargetError

# Used when the target carries neither http:// nor https://. Kept verbatim:
# existing clients may depend on the resulting origin string.
FALLBACK_SCHEME = "httpd://"

_SCHEMES = ("https://", "http://")


def parse_target_url(url: str) -> tuple[str, str]:
    """Split a target such as ``https://host/path/page`` into origin and resource.

    The scheme is stripped, trailing slashes are dropped and the remainder is
    split on the first ``/``: the part before it becomes the host, the rest the
    resource. The origin is the scheme followed by the host.

    Args:
        url: Raw value of the ``url`` query parameter

    Returns:
        Tuple of (origin, resource), e.g. ("https://host", "path/page")

    Raises:
        InvalidTargetError: If there is no ``/`` between host and resource
    """
    scheme = FALLBACK_SCHEME
    remainder = url
    for candidate in _SCHEMES:
        if url.startswith(candidate):
            scheme = candidate
            remainder = url[len(candidate):]
            break

    parts = remainder.rstrip("/").split("/", 1)
    if len(parts) != 2:
        raise InvalidTargetError("Invalid path", {"url": url})

    host, resource = parts
    return scheme + host, resource
