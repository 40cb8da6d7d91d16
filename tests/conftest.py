"""Shared fixtures for the guanaitong-openapi test suite."""
from __future__ import annotations

import itertools
from collections import deque
from types import SimpleNamespace
from unittest.mock import MagicMock
from urllib.parse import parse_qsl, urlsplit

import httpx
import pytest

from guanaitong_openapi.client import OpenApiClient
from guanaitong_openapi.config import Settings

APP_ID = "test-app-id"
APP_SECRET = "test-app-secret"
TEST_BASE_URL = "https://openapi.guanaitong.tech"
START_TIME = 1_700_000_000.0


def make_response(status_code=200, json_data=None, text=""):
    """Build a fake httpx.Response."""
    r = MagicMock(spec=httpx.Response)
    r.status_code = status_code
    r.text = text
    r.json.return_value = json_data
    return r


def envelope(data=None, code=0, msg="ok"):
    return {"code": code, "msg": msg, "data": data}


class FakeClock:
    """Callable clock returning epoch seconds that tests can move forward."""

    def __init__(self, now=START_TIME):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeTransport:
    """Stands in for httpx.Client: answers POSTs by path and records every call.

    Queued answers are consumed in order; the last one repeats. An answer may
    be an envelope dict, a response object, an exception to raise, or a
    callable taking the recorded call.
    """

    def __init__(self):
        self.calls = []
        self._routes = {}
        self._token_ids = itertools.count(1)
        self.route("/token/create", self._new_token)
        self.close = MagicMock()

    def _new_token(self, call):
        return envelope({"access_token": f"tok-{next(self._token_ids)}", "expires_in": 7200})

    def route(self, path, *answers):
        self._routes[path] = deque(answers)

    def post(self, url, content=None, headers=None):
        parts = urlsplit(url)
        call = SimpleNamespace(
            url=url,
            path=parts.path,
            query=dict(parse_qsl(parts.query)),
            body=content,
            content_type=(headers or {}).get("Content-Type"),
        )
        self.calls.append(call)

        answers = self._routes[parts.path]
        answer = answers.popleft() if len(answers) > 1 else answers[0]
        if callable(answer) and not isinstance(answer, MagicMock):
            answer = answer(call)
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, dict):
            return make_response(200, answer)
        return answer

    def calls_to(self, path):
        return [c for c in self.calls if c.path == path]

    @property
    def paths(self):
        return [c.path for c in self.calls]


@pytest.fixture
def fake_settings() -> Settings:
    return Settings(app_id=APP_ID, app_secret=APP_SECRET)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(transport, clock) -> OpenApiClient:
    """Client on the test endpoint wired to the fake transport and clock."""
    return OpenApiClient(APP_ID, APP_SECRET, http_client=transport, clock=clock)
