from core.headers import HeaderBuilder

INBOUND = [
    (b"host", b"frontend.local"),
    (b"connection", b"keep-alive, x-trace"),
    (b"keep-alive", b"timeout=5"),
    (b"x-trace", b"1"),
    (b"content-length", b"12"),
    (b"content-type", b"application/json"),
    (b"cookie", b"a=1"),
    (b"cookie", b"b=2"),
]


def test_request_headers_copied_verbatim_with_body():
    builder = HeaderBuilder()
    assert builder.build_request_headers(INBOUND, has_body=True) == INBOUND


def test_request_headers_drop_framing_without_body():
    builder = HeaderBuilder()
    headers = INBOUND + [(b"Transfer-Encoding", b"chunked")]

    result = builder.build_request_headers(headers, has_body=False)

    names = [k.lower() for k, _ in result]
    assert b"content-length" not in names
    assert b"transfer-encoding" not in names
    assert (b"host", b"frontend.local") in result
    assert (b"connection", b"keep-alive, x-trace") in result


def test_hop_by_hop_stripping_includes_connection_tokens():
    builder = HeaderBuilder(strip_hop_by_hop=True)

    result = builder.build_request_headers(INBOUND, has_body=True)

    assert result == [
        (b"host", b"frontend.local"),
        (b"content-length", b"12"),
        (b"content-type", b"application/json"),
        (b"cookie", b"a=1"),
        (b"cookie", b"b=2"),
    ]


def test_response_headers_keep_duplicates_and_case():
    raw = [(b"Set-Cookie", b"a=1"), (b"Set-Cookie", b"b=2"), (b"Transfer-Encoding", b"chunked")]

    assert HeaderBuilder().build_response_headers(raw) == raw
    assert HeaderBuilder(strip_hop_by_hop=True).build_response_headers(raw) == raw[:2]


def test_request_headers_drop_transfer_encoding_with_buffered_body():
    builder = HeaderBuilder()
    headers = [(b"content-type", b"application/json"), (b"transfer-encoding", b"chunked")]

    result = builder.build_request_headers(headers, has_body=True)

    assert result == [(b"content-type", b"application/json")]
