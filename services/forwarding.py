"""Forwarding orchestration for /api requests."""

from core.config import Config
from core.headers import HeaderBuilder, RawHeaders
from core.protocols import RequestLogger
from core.request_types import PreparedRequest
from core.router import build_target_url, sends_body


class ForwardingService:
    """Prepare inbound requests for the backend."""

    def __init__(
        self,
        config: Config,
        logger: RequestLogger,
        header_builder: HeaderBuilder,
    ) -> None:
        self._config = config
        self._logger = logger
        self._headers = header_builder

    def prepare(
        self,
        method: str,
        path: str,
        query: str,
        headers: RawHeaders,
        body: bytes | None,
    ) -> PreparedRequest:
        """Prepare a forwarded request against the configured backend origin."""
        method = method.upper()
        target_url = build_target_url(self._config.backend.origin, path, query)
        has_body = sends_body(method)
        upstream_headers = self._headers.build_request_headers(headers, has_body=has_body)
        self._logger.log_forward(method, target_url)
        return PreparedRequest(
            method,
            target_url,
            upstream_headers,
            body if has_body else None,
        )

    def login_url(self) -> str:
        """Backend endpoint probed by the login page."""
        backend = self._config.backend
        return f"{backend.origin}{backend.login_path}"
