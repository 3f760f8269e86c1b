import json

from ui import log_utils
from ui.log_utils import _redact_headers, clear_logs, write_cli_log, write_incoming_log


def test_redact_headers_masks_sensitive_values():
    headers = {
        "authorization": "Bearer abcdefghijklmnop",
        "x-api-key": "short",
        "cookie": "session=0123456789abcdef",
        "accept": "application/json",
    }

    redacted = _redact_headers(headers)

    assert redacted["authorization"] == "Bearer...mnop"
    assert redacted["x-api-key"] == "***"
    assert redacted["cookie"] == "sessio...cdef"
    assert redacted["accept"] == "application/json"


def test_write_incoming_log(tmp_path):
    path = write_incoming_log(
        "PUT",
        "/api/items/1",
        {"content-type": "application/json"},
        42,
        query="force=1",
        log_root=tmp_path,
    )

    assert path.parent == tmp_path / "incoming"
    entry = json.loads(path.read_text())
    assert entry["method"] == "PUT"
    assert entry["path"] == "/api/items/1"
    assert entry["query"] == "force=1"
    assert entry["body_size"] == 42


def test_write_cli_log_appends_lines(isolated_logs):
    write_cli_log("STARTUP", "Proxy started", port=5173)
    write_cli_log("ERROR", "boom")

    lines = log_utils.CLI_LOG_FILE.read_text().splitlines()
    assert len(lines) == 2
    assert lines[0].endswith("STARTUP: Proxy started port=5173")
    assert lines[1].endswith("ERROR: boom")


def test_clear_logs_removes_previous_incoming(tmp_path):
    write_incoming_log("GET", "/api/a", {}, 0, log_root=tmp_path)
    write_incoming_log("GET", "/api/b", {}, 0, log_root=tmp_path)

    assert clear_logs(tmp_path) == 2
    assert list((tmp_path / "incoming").glob("*.json")) == []


def test_clear_logs_without_folder(tmp_path):
    assert clear_logs(tmp_path) == 0
