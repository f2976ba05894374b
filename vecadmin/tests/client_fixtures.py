import json as jsonlib
from typing import Any, Dict, List, Optional

import pytest
import requests  # type: ignore

from vecadmin.client import AdminClient
from vecadmin.client.config import (
    ADDITIONAL_HEADERS_ENV,
    CLIENT_ID_ENV,
    CLIENT_SECRET_ENV,
)


TEST_TOKEN = "test-token"
PROJECT_ID = "5e0c9d6e-8c1a-4d5e-9a43-2c1b8f1f4a10"
API_KEY_ID = "0b7d44c2-3f0e-4a71-b6a5-7d9e8a52c3f1"
ORGANIZATION_ID = "-NM7af6f234168c4e44a"


def make_response(status_code: int = 200, body: Any = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response._content = b"" if body is None else jsonlib.dumps(body).encode("utf-8")
    response.headers["Content-Type"] = "application/json"
    return response


class FakeSession:
    """Stands in for `requests.Session`, replaying queued responses and recording every call."""

    def __init__(self):
        self.responses: List[requests.Response] = []
        self.calls: List[Dict[str, Any]] = []

    def queue(self, status_code: int = 200, body: Any = None):
        self.responses.append(make_response(status_code, body))
        return self

    def request(
        self,
        method: str,
        url: str,
        params: Optional[dict] = None,
        json: Optional[dict] = None,
        headers: Optional[dict] = None,
        timeout: Optional[float] = None,
    ):
        self.calls.append(
            {
                "method": method,
                "url": url,
                "params": params,
                "json": json,
                "headers": headers,
                "timeout": timeout,
            }
        )
        assert self.responses, f"Unexpected request: {method} {url}"
        return self.responses.pop(0)

    @property
    def last_call(self) -> Dict[str, Any]:
        return self.calls[-1]


@pytest.fixture
def clean_env(monkeypatch):
    for var in (CLIENT_ID_ENV, CLIENT_SECRET_ENV, ADDITIONAL_HEADERS_ENV):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def admin_client(clean_env, fake_session):
    return AdminClient(
        client_id="test-client-id",
        client_secret="test-client-secret",
        session=fake_session,
        token_fetcher=lambda client_id, client_secret: TEST_TOKEN,
    )
