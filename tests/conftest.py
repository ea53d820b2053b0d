"""Pytest fixtures for testing"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, Generator, List

import httpx
import pytest

from plaid_tartan.config import ClientConfig
from plaid_tartan.infrastructure.clients.plaid import PlaidClient

STUB_DIR = Path(__file__).resolve().parents[1] / "vendor_stub"

ENDPOINT = "https://tartan.plaid.com"


def load_stub(name: str) -> Dict[str, Any]:
    return json.loads((STUB_DIR / f"{name}.json").read_text())


@pytest.fixture
def config() -> ClientConfig:
    """Credentials matching the mock server's defaults"""
    return ClientConfig(endpoint=ENDPOINT, client_id="test_id", secret="test_secret")


@pytest.fixture
def stub() -> Callable[[str], Dict[str, Any]]:
    """Loader for the JSON stubs under vendor_stub/"""
    return load_stub


@pytest.fixture
def sent_requests() -> List[httpx.Request]:
    """Requests captured by the `respond_with` transport"""
    return []


@pytest.fixture
def respond_with(config: ClientConfig, sent_requests: List[httpx.Request]):
    """
    Build a PlaidClient whose transport answers every request with a fixed
    status and JSON body (or raw bytes), recording what was sent.
    """
    clients = []

    def factory(status_code: int, body: Any = None, raw: bytes | None = None) -> PlaidClient:
        def handler(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            if raw is not None:
                return httpx.Response(status_code, content=raw)
            return httpx.Response(status_code, json=body if body is not None else {})

        http = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(http)
        return PlaidClient(config=config, http=http)

    yield factory

    for http in clients:
        http.close()


@pytest.fixture
def plaid_server(config: ClientConfig) -> Generator[PlaidClient, None, None]:
    """PlaidClient wired to the in-process mock Plaid server"""
    from fastapi.testclient import TestClient

    from mock_services.plaid_server.main import app

    with TestClient(app, base_url=ENDPOINT) as http:
        yield PlaidClient(config=config, http=http)
