"""Shared protocol definitions."""

from typing import Protocol


class RequestLogger(Protocol):
    """Protocol for request logging (Dashboard)."""

    def log_forward(self, method: str, target_url: str) -> None: ...
    def log_response(self, method: str, target_url: str, status: int) -> None: ...
    def log_redirect(self, location: str) -> None: ...
    def log_error(self, route: str, status: int, message: str) -> None: ...
