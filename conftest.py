import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from core.config import Config


class RecordingLogger:
    """RequestLogger that keeps every event in memory."""

    def __init__(self):
        self.forwards = []
        self.responses = []
        self.redirects = []
        self.errors = []

    def log_forward(self, method, target_url):
        self.forwards.append((method, target_url))

    def log_response(self, method, target_url, status):
        self.responses.append((method, target_url, status))

    def log_redirect(self, location):
        self.redirects.append(location)

    def log_error(self, route, status, message):
        self.errors.append((route, status, message))


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path, monkeypatch):
    """Keep log files written during tests out of the working directory."""
    from ui import log_utils

    log_root = tmp_path / "logs"
    monkeypatch.setattr(log_utils, "LOG_ROOT", log_root)
    monkeypatch.setattr(log_utils, "CLI_LOG_FILE", log_root / "proxy.log")
    return log_root


@pytest.fixture
def make_client(recording_logger):
    """Build a TestClient whose backend is served by ``handler``."""
    clients = []

    def _make(handler, config=None):
        app = create_app(
            config or Config(),
            recording_logger,
            transport=httpx.MockTransport(handler),
        )
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)
