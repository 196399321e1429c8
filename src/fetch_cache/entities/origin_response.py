"""Origin response domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class OriginResponse:
    """Successful response read in full from an origin.

    Attributes:
        url: The URL that was requested
        status_code: HTTP status of the final response (always 2xx)
        body: Complete response body
        content_type: Value of the Content-Type header ("" when absent)
    """

    url: str
    status_code: int
    body: bytes
    content_type: str = ""
