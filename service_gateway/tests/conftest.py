"""
Shared fixtures for Gateway tests.
"""

import asyncio
import json
from typing import Callable, Dict, List, Union

import httpx
import pytest
from fastapi.testclient import TestClient

from service_gateway.app.main import create_app

STORAGE_WRITE_URL = "http://storage-write.test"
SAVE_IMAGE_URL = "http://save-image.test"

Responder = Union[httpx.Response, Callable]


class DownstreamRecorder:
    """MockTransport handler that records every outbound request.

    Responses are looked up by URL path; a value may be a ready response or
    an (async) callable taking the request.
    """

    def __init__(self):
        self.calls: List[httpx.Request] = []
        self.responses: Dict[str, Responder] = {}

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        responder = self.responses.get(request.url.path, httpx.Response(200, json={}))
        if callable(responder):
            result = responder(request)
            if hasattr(result, "__await__"):
                result = await result
            return result
        return responder

    def calls_to(self, path: str) -> List[httpx.Request]:
        return [call for call in self.calls if call.url.path == path]

    @staticmethod
    def body(request: httpx.Request) -> dict:
        return json.loads(request.content)


@pytest.fixture
def recorder():
    return DownstreamRecorder()


@pytest.fixture
def http_client(recorder):
    client = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
    yield client
    asyncio.run(client.aclose())


@pytest.fixture
def upload_metadata():
    return {
        "season": "SS24",
        "show_name": "Paris Fashion Week",
        "designer": "Maison Test",
        "description": "Look 12, ivory silk gown",
        "final_image_key": "ss24/maison-test/look-12.jpg",
        "label": "look-12",
        "type": "runway",
        "requestId": "r2",
    }


@pytest.fixture
def make_gateway(http_client):
    """Factory for a gateway TestClient wired to the recording transport."""

    def _make(**overrides):
        settings = {
            "storage_write_url": STORAGE_WRITE_URL,
            "save_image_url": SAVE_IMAGE_URL,
            **overrides,
        }
        return TestClient(create_app(http_client=http_client, **settings))

    return _make


@pytest.fixture
def client(make_gateway):
    """Create test client."""
    return make_gateway()
