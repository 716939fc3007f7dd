import pytest

from datapipe.plugins import _BACKEND_FACTORIES
from datapipe.utils.logging import configure_logging


@pytest.fixture(autouse=True)
def quiet_logging():
    """Avoid Rich handlers in tests and keep the datapipe logger at WARNING."""
    configure_logging(structured=True, level="WARNING")
    yield
    configure_logging(structured=False, level="INFO")


@pytest.fixture(autouse=True)
def clean_registry():
    _BACKEND_FACTORIES.clear()
    yield
    _BACKEND_FACTORIES.clear()


class ScriptedFetcher:
    """Single-page fetcher that replays canned responses and records requests."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, params):
        self.requests.append(params)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def scripted_fetcher():
    return ScriptedFetcher
