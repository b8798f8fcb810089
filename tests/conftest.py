"""
Shared test fixtures for the pyhttpget test suite.
"""

from typing import Callable, List

import httpx
import pytest

from pyhttpget import config as config_module


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Give every test the built-in defaults and no proxy from the environment."""
    for name in ("HTTPS_PROXY", "HTTP_PROXY", "https_proxy", "http_proxy", "ALL_PROXY", "all_proxy"):
        monkeypatch.delenv(name, raising=False)
    config_module.reset_config()
    yield
    config_module.reset_config()


@pytest.fixture
def requests_seen() -> List[httpx.Request]:
    """Requests received by the mock transport, in order."""
    return []


@pytest.fixture
def make_client(requests_seen) -> Callable[..., httpx.Client]:
    """Build a client whose transport answers with ``handler(request)``."""
    clients = []

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        client = httpx.Client(transport=httpx.MockTransport(recording_handler))
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()
