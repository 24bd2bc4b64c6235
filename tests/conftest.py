from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest
from keyring.errors import PasswordDeleteError

from linkup_client.utils.http_client import TransportError


class FakeHttpClient:
    """Replays queued responses and records every request."""

    def __init__(self, responses: Optional[List[Any]] = None) -> None:
        self.responses = list(responses or [])
        self.calls: List[Dict[str, Any]] = []

    async def __aenter__(self) -> "FakeHttpClient":
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        return None

    async def post_json(self, url: str, payload: Dict[str, Any], headers: Dict[str, str]) -> Any:
        return self._next("POST", url, headers, payload)

    async def get_json(self, url: str, headers: Dict[str, str]) -> Any:
        return self._next("GET", url, headers, None)

    def _next(self, method: str, url: str, headers: Dict[str, str], payload: Any) -> Any:
        self.calls.append({"method": method, "url": url, "headers": headers, "payload": payload})
        if not self.responses:
            raise AssertionError(f"unexpected {method} {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class MemoryKeyring:
    def __init__(self) -> None:
        self.values: Dict[tuple, str] = {}

    def set_password(self, service: str, key: str, value: str) -> None:
        self.values[(service, key)] = value

    def get_password(self, service: str, key: str) -> Optional[str]:
        return self.values.get((service, key))

    def delete_password(self, service: str, key: str) -> None:
        if (service, key) not in self.values:
            raise PasswordDeleteError("not found")
        del self.values[(service, key)]


def login_body(country: Optional[str] = "fr", token: str = "tok", user_id: str = "user-1", **data: Any) -> Dict[str, Any]:
    user: Dict[str, Any] = {"id": user_id}
    if country is not None:
        user["country"] = country
    return {
        "status": 0,
        "data": {"user": user, "authTicket": {"token": token, "expires": 1900000000, "duration": 15552000000}, **data},
    }


@pytest.fixture
def make_login_body():
    return login_body


@pytest.fixture
def fake_http():
    return FakeHttpClient()


@pytest.fixture
def memory_keyring():
    return MemoryKeyring()


@pytest.fixture
def transport_error():
    return TransportError("connection reset")
