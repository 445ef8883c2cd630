import json
import os

import httpx
import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("RESEND_API_KEY", "re_test_key_123456")
os.environ.setdefault("FROM_EMAIL", "Site <noreply@site.example>")
os.environ.setdefault("TO_EMAIL", "owner@site.example")
os.environ.setdefault("ALLOWED_ORIGIN", "")

from contact_relay.common.config import Settings
from contact_relay.common.rate_limit import limiter
from contact_relay.common.utils.email_service import ResendClient
from contact_relay.main import create_app

ORIGIN = "https://site.example"


class FakeResend:
    """Records provider calls and answers with a canned response."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.body = {"id": "email_123"}
        self.raise_error = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raise_error is not None:
            raise self.raise_error
        if isinstance(self.body, str):
            return httpx.Response(self.status_code, text=self.body)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def payloads(self):
        return [json.loads(r.content) for r in self.requests]


def make_settings(**overrides) -> Settings:
    values = {
        "RESEND_API_KEY": "re_test_key_123456",
        "FROM_EMAIL": "Site <noreply@site.example>",
        "TO_EMAIL": "owner@site.example",
        "ALLOWED_ORIGIN": "",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture(autouse=True)
def reset_limiter():
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def resend():
    return FakeResend()


@pytest.fixture
def make_client(resend):
    def _make(client_address=("testclient", 50000), **overrides) -> TestClient:
        settings = make_settings(**overrides)
        email_client = ResendClient(settings, transport=httpx.MockTransport(resend))
        return TestClient(create_app(settings, email_client), client=client_address)

    return _make


@pytest.fixture
def client(make_client):
    return make_client()
