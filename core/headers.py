"""Header handling for forwarded requests and relayed responses."""

RawHeaders = list[tuple[bytes, bytes]]

HOP_BY_HOP_HEADERS = frozenset(
    {
        b"connection",
        b"keep-alive",
        b"proxy-authenticate",
        b"proxy-authorization",
        b"te",
        b"trailer",
        b"trailers",
        b"transfer-encoding",
        b"upgrade",
    }
)
BODY_FRAMING_HEADERS = frozenset({b"content-length", b"transfer-encoding"})


class HeaderBuilder:
    """Copy headers between the caller and the backend."""

    def __init__(self, strip_hop_by_hop: bool = False) -> None:
        self.strip_hop_by_hop = strip_hop_by_hop

    def build_request_headers(self, headers: RawHeaders, *, has_body: bool) -> RawHeaders:
        """Copy inbound headers verbatim for the upstream request.

        When no body is sent, the framing headers are dropped so the backend
        does not wait for bytes that never arrive. A sent body is fully
        buffered and re-framed with Content-Length, so an inbound
        Transfer-Encoding never goes upstream.
        """
        upstream = self._filter(headers)
        if has_body:
            return [(k, v) for k, v in upstream if k.lower() != b"transfer-encoding"]
        return [(k, v) for k, v in upstream if k.lower() not in BODY_FRAMING_HEADERS]

    def build_response_headers(self, headers: RawHeaders) -> RawHeaders:
        """Copy backend response headers verbatim, duplicates included."""
        return self._filter(headers)

    def _filter(self, headers: RawHeaders) -> RawHeaders:
        pairs = [(bytes(k), bytes(v)) for k, v in headers]
        if not self.strip_hop_by_hop:
            return pairs
        blocked = set(HOP_BY_HOP_HEADERS)
        for key, value in pairs:
            if key.lower() == b"connection":
                # Headers listed in Connection are hop-by-hop too
                blocked.update(
                    token.strip().lower() for token in value.split(b",") if token.strip()
                )
        return [(k, v) for k, v in pairs if k.lower() not in blocked]
