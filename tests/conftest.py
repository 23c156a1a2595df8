# SODA Client
# File: tests/conftest.py
# Version: v2

from __future__ import annotations

from typing import Callable, List

import httpx
import pytest

from soda_client.client import SodaClient


class FakeSodaServer:
    """Routes requests to a handler and remembers what was sent."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.handler = handler
        self.requests: List[httpx.Request] = []
        self.transport = httpx.MockTransport(self._dispatch)

    def _dispatch(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def fake_server():
    """Factory: fake_server(handler) -> FakeSodaServer."""
    return FakeSodaServer


@pytest.fixture
def make_client():
    def _make(server: FakeSodaServer, **kwargs) -> SodaClient:
        kwargs.setdefault("token", "app-token")
        return SodaClient("https://opendata.socrata.com/", transport=server.transport, **kwargs)

    return _make
