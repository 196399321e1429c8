"""Serve an in-memory object with conditional request and byte range support.

Precondition headers are evaluated in RFC 7232 order (If-Match,
If-Unmodified-Since, If-None-Match, If-Modified-Since). A single byte range
is answered with 206; a request for several ranges gets the full body.
"""

from datetime import datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime

from starlette.requests import Request
from starlette.responses import Response

from fetch_cache.entities import CachedObject

_SAFE_METHODS = ("GET", "HEAD")


class RangeNotSatisfiable(Exception):
    """Raised when a Range header is malformed or lies outside the body."""


def quote_etag(content_hash: str) -> str:
    """Render a content hash as a strong entity tag."""
    return f'"{content_hash}"'


def format_http_date(value: datetime) -> str:
    """Format a datetime as an IMF-fixdate, e.g. ``Sun, 06 Nov 1994 08:49:37 GMT``."""
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


def parse_http_date(value: str) -> datetime | None:
    """Parse an HTTP date, returning None when it cannot be understood."""
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _etag_list(header: str) -> list[str]:
    return [tag.strip() for tag in header.split(",") if tag.strip()]


def _strong_match(header: str, etag: str) -> bool:
    for tag in _etag_list(header):
        if tag == "*" or (not tag.startswith("W/") and tag == etag):
            return True
    return False


def _weak_match(header: str, etag: str) -> bool:
    bare = etag.removeprefix("W/")
    for tag in _etag_list(header):
        if tag == "*" or tag.removeprefix("W/") == bare:
            return True
    return False


def check_preconditions(request: Request, etag: str, last_modified: datetime) -> int | None:
    """Evaluate conditional headers.

    Returns:
        412 or 304 when the request must be short-circuited, otherwise None
    """
    headers = request.headers
    modified = last_modified.replace(microsecond=0)
    safe = request.method in _SAFE_METHODS

    if "if-match" in headers:
        if not _strong_match(headers["if-match"], etag):
            return 412
    elif "if-unmodified-since" in headers:
        since = parse_http_date(headers["if-unmodified-since"])
        if since is not None and modified > since:
            return 412

    if "if-none-match" in headers:
        if _weak_match(headers["if-none-match"], etag):
            return 304 if safe else 412
    elif safe and "if-modified-since" in headers:
        since = parse_http_date(headers["if-modified-since"])
        if since is not None and modified <= since:
            return 304

    return None


def if_range_allows(request: Request, etag: str, last_modified: datetime) -> bool:
    """Check whether an If-Range header (if any) permits a partial response."""
    value = request.headers.get("if-range")
    if value is None:
        return True
    value = value.strip()
    if value.startswith('"') or value.startswith("W/"):
        return value == etag
    since = parse_http_date(value)
    return since is not None and last_modified.replace(microsecond=0) == since


def _parse_position(value: str) -> int:
    if not value.isdigit():
        raise RangeNotSatisfiable(f"invalid range position {value!r}")
    return int(value)


def parse_range(header: str, size: int) -> list[tuple[int, int]] | None:
    """Parse a ``Range`` header into (start, length) pairs.

    Returns:
        None when the header uses a unit other than bytes, otherwise the
        satisfiable ranges in request order

    Raises:
        RangeNotSatisfiable: If the header is malformed or no range overlaps the body
    """
    unit, _, spec = header.partition("=")
    if unit.strip().lower() != "bytes" or not spec:
        return None

    ranges: list[tuple[int, int]] = []
    for part in spec.split(","):
        part = part.strip()
        if not part:
            continue
        first, sep, last = part.partition("-")
        if not sep:
            raise RangeNotSatisfiable(f"invalid range {part!r}")
        first, last = first.strip(), last.strip()

        if not first:
            # Suffix range: the final N bytes
            suffix = _parse_position(last)
            if suffix == 0 or size == 0:
                continue
            suffix = min(suffix, size)
            ranges.append((size - suffix, suffix))
            continue

        start = _parse_position(first)
        if start >= size:
            continue
        if not last:
            ranges.append((start, size - start))
            continue
        end = _parse_position(last)
        if end < start:
            raise RangeNotSatisfiable(f"invalid range {part!r}")
        end = min(end, size - 1)
        ranges.append((start, end - start + 1))

    if not ranges:
        raise RangeNotSatisfiable("no range overlaps the content")
    return ranges


def serve_content(request: Request, obj: CachedObject) -> Response:
    """Build the response for ``obj`` honouring conditional and range headers.

    Args:
        request: The inbound request
        obj: The snapshot to serve

    Returns:
        A 200, 206, 304, 412 or 416 response
    """
    etag = quote_etag(obj.content_hash)
    last_modified = obj.fetched_at

    status = check_preconditions(request, etag, last_modified)
    if status == 304:
        return Response(status_code=304, headers={"ETag": etag})
    if status == 412:
        return Response(status_code=412)

    size = len(obj.body)
    headers = {
        "ETag": etag,
        "Last-Modified": format_http_date(last_modified),
        "Accept-Ranges": "bytes",
    }
    if obj.content_type:
        headers["Content-Type"] = obj.content_type

    body = obj.body
    status_code = 200
    range_header = request.headers.get("range")
    if range_header and request.method in _SAFE_METHODS and if_range_allows(request, etag, last_modified):
        try:
            ranges = parse_range(range_header, size)
        except RangeNotSatisfiable:
            return Response(
                content=b"requested range not satisfiable",
                status_code=416,
                headers={"Content-Range": f"bytes */{size}"},
                media_type="text/plain",
            )
        if ranges is not None and len(ranges) == 1:
            start, length = ranges[0]
            body = obj.body[start:start + length]
            status_code = 206
            headers["Content-Range"] = f"bytes {start}-{start + length - 1}/{size}"

    if request.method == "HEAD":
        headers["Content-Length"] = str(len(body))
        return Response(status_code=status_code, headers=headers)

    return Response(content=body, status_code=status_code, headers=headers)
