# tests/conftest.py
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from loguru import logger

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from render_deploy.client import RenderClient  # noqa: E402
from render_deploy.config import Settings  # noqa: E402
from render_deploy.reporter import PipelineReporter  # noqa: E402


def make_response(status_code=200, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400  # mirrors requests.Response.ok
    response.text = text
    return response


class FakeTimer:
    """Records requested waits instead of sleeping."""

    def __init__(self, cancel_after=None):
        self.waits = []
        self.cancel_after = cancel_after

    def wait(self, seconds):
        self.waits.append(seconds)
        if self.cancel_after is not None and len(self.waits) > self.cancel_after:
            return False
        return True

    def cancel(self):
        self.cancel_after = 0


@pytest.fixture
def log_messages():
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def settings():
    return Settings(service_id="srv-abc123", api_key="rnd_test_key")


@pytest.fixture
def waiting_settings():
    return Settings(service_id="srv-abc123", api_key="rnd_test_key", wait_for_success=True)


@pytest.fixture
def session():
    s = MagicMock()
    s.headers = {}
    return s


@pytest.fixture
def client(session):
    return RenderClient("rnd_test_key", "srv-abc123", session=session)


@pytest.fixture
def reporter():
    return PipelineReporter(annotate=False)


@pytest.fixture
def timer():
    return FakeTimer()
