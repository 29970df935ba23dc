"""Exceptions for the Bluesky RSS generator."""


class BskyRssError(Exception):
    """Base exception class for all generator errors."""

    pass


class FetchError(BskyRssError):
    """Raised when a Bluesky API call fails.

    Attributes:
        endpoint: The XRPC method that was called.
        status_code: HTTP status code, or None for network-level failures.
        body: Response body text (or the underlying error message).
    """

    def __init__(
        self,
        endpoint: str,
        status_code: int | None,
        body: str,
        reason: str = "",
    ):
        self.endpoint = endpoint
        self.status_code = status_code
        self.body = body
        if status_code is None:
            message = f"Bluesky API request to {endpoint} failed: {body}"
        else:
            message = f"Bluesky API {status_code} {reason}".rstrip() + f": {body}"
        super().__init__(message)


class ArgumentError(BskyRssError):
    """Raised when command-line arguments are invalid."""

    pass
