from __future__ import annotations

import json
from typing import Any

import pytest
import requests

from vastu_client.config import AppSettings
from vastu_client.credentials import CredentialStore
from vastu_client.http import HttpClient
from vastu_client.storage import InMemoryKeyValueStore


def make_settings(**overrides: Any) -> AppSettings:
    values: dict[str, Any] = {
        "api_base_url": "https://api.example.test",
        "auth_base_url": "https://auth.example.test",
        "tenant_name": "sampletenant",
        "tenant_id": "tid-default",
        "default_cloud_name": "default-cloud",
        "default_upload_preset": "default-preset",
        "timeout_seconds": 5,
        "data_dir": "/tmp/vastu-tests",
        "secure_storage": False,
        "auth_provider": "fake",
        "log_level": "DEBUG",
    }
    values.update(overrides)
    return AppSettings(**values)


def make_response(
    status_code: int,
    body: Any = None,
    headers: dict[str, str] | None = None,
) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.encoding = "utf-8"
    if body is None:
        response._content = b""
    elif isinstance(body, (dict, list)):
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = str(body).encode("utf-8")
    response.headers.update(headers or {})
    return response


class FakeSession(requests.Session):
    def __init__(self):
        super().__init__()
        self.calls: list[dict[str, Any]] = []
        self._queue: list[Any] = []

    def queue(self, *responses: Any) -> None:
        self._queue.extend(responses)

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self._queue:
            raise AssertionError(f"Unexpected request: {method} {url}")
        outcome = self._queue.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def last_call(self) -> dict[str, Any]:
        return self.calls[-1]

    def last_json(self) -> Any:
        data = self.last_call.get("data")
        return json.loads(data) if data else None


@pytest.fixture
def settings() -> AppSettings:
    return make_settings()


@pytest.fixture
def secure_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore(encrypted=True)


@pytest.fixture
def preferences() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def credentials(secure_store) -> CredentialStore:
    return CredentialStore(secure_store)


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def http_client(settings, credentials, fake_session) -> HttpClient:
    return HttpClient(settings, credentials, session=fake_session)
