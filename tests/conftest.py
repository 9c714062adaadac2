"""Shared fixtures: a SheldonClient wired to an in-memory fake service."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Tuple

import httpx
import pytest

from sheldon_client.client import SheldonClient
from sheldon_client.config import Settings

HOST = "http://sheldon.host"


class FakeSheldon:
    """httpx.MockTransport handler answering stubbed (method, url) pairs."""

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], Tuple[int, bytes]] = {}
        self.requests: List[httpx.Request] = []

    def stub(self, method: str, url: str, status: int = 200, body: Any = None) -> None:
        if body is None:
            content = b""
        elif isinstance(body, (str, bytes)):
            content = body.encode() if isinstance(body, str) else body
        else:
            content = json.dumps(body).encode()
        self.routes[(method.upper(), url)] = (status, content)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, str(request.url))
        if key not in self.routes:
            raise AssertionError(f"unexpected request {request.method} {request.url}")
        status, content = self.routes[key]
        return httpx.Response(status, content=content)

    def calls(self, method: str | None = None) -> List[Tuple[str, str]]:
        return [
            (request.method, str(request.url))
            for request in self.requests
            if method is None or request.method == method.upper()
        ]


@pytest.fixture
def fake_sheldon() -> FakeSheldon:
    return FakeSheldon()


@pytest.fixture
def http(fake_sheldon):
    client = httpx.Client(transport=httpx.MockTransport(fake_sheldon))
    yield client
    client.close()


@pytest.fixture
def sheldon(http) -> SheldonClient:
    return SheldonClient(Settings(host=HOST + "/"), http=http)
