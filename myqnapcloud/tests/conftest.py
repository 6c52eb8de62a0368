"""Global test configuration and fixtures."""
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union
import json
import pytest

from myqnapcloud.api.api_client import APIClient, ServiceConfig

class FakeResponse:
    """In-memory TransportResponse"""

    def __init__(self, status: int, body: bytes = b"", headers: Optional[Dict[str, str]] = None, chunk_size: int = 4):
        self.status = status
        self.headers = headers or {"Content-Type": "application/json"}
        self._body = body
        self._chunk_size = chunk_size
        self.read_calls = 0
        self.released = False

    async def read(self) -> bytes:
        self.read_calls += 1
        return self._body

    async def iter_chunks(self):
        self.read_calls += 1
        for i in range(0, len(self._body), self._chunk_size):
            yield self._body[i:i + self._chunk_size]

    def release(self) -> None:
        self.released = True

class FakeTransport:
    """Transport that replays queued responses and records requests"""

    def __init__(self):
        self.requests: List[Tuple[str, str, Dict[str, str], Optional[bytes]]] = []
        self.responses: List[Union[FakeResponse, BaseException]] = []
        self.closed = False

    def queue(self, status: int, body: Union[bytes, str, Any] = b"", headers: Optional[Dict[str, str]] = None) -> FakeResponse:
        if isinstance(body, str):
            body = body.encode("utf-8")
        elif not isinstance(body, bytes):
            body = json.dumps(body).encode("utf-8")
        response = FakeResponse(status, body, headers)
        self.responses.append(response)
        return response

    def fail_with(self, error: BaseException) -> None:
        self.responses.append(error)

    async def execute(self, method: str, url: str, headers: Mapping[str, str], body: Optional[bytes]):
        self.requests.append((method, url, dict(headers), body))
        result = self.responses.pop(0)
        if isinstance(result, BaseException):
            raise result
        return result

    async def close(self) -> None:
        self.closed = True

@pytest.fixture
def transport():
    """Fixture for an in-memory transport"""
    return FakeTransport()

@pytest.fixture
def service_config():
    """Fixture for API configuration"""
    return ServiceConfig(base_path="https://api.example.com", version="v1.1")

@pytest.fixture
def api_client(service_config, transport):
    """Fixture for API client"""
    return APIClient(service_config, transport)

@pytest.fixture
def make_response():
    """Fixture returning the in-memory response factory"""
    return FakeResponse
