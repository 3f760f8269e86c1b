"""Custom exception hierarchy for the passthrough proxy."""


class ProxyError(Exception):
    """Base exception for all proxy errors."""


class RequestTooLarge(ProxyError):
    """Request body exceeds size limit.

    Attributes:
        size: Number of bytes received before giving up
        limit: Configured maximum body size
    """

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Request body too large ({size} > {limit} bytes)")
        self.size = size
        self.limit = limit
