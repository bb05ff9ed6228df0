"""Shared pytest fixtures: fake HTTP responses and credential toggles."""

from __future__ import annotations

from typing import Any, Callable

import pytest


class FakeResponse:
    """Minimal stand-in for ``requests.Response``."""

    def __init__(self, status_code: int = 200, payload: Any = None, reason: str = "OK"):
        self.status_code = status_code
        self.reason = reason
        self._payload = payload

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


@pytest.fixture
def with_token(monkeypatch: pytest.MonkeyPatch) -> str:
    """Configure a deterministic API token and the default actor."""

    monkeypatch.setenv("APIFY_TOKEN", "test-token")
    monkeypatch.delenv("APIFY_ACTOR_ID", raising=False)
    return "test-token"


@pytest.fixture
def without_token(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove any API token from the environment."""

    monkeypatch.delenv("APIFY_TOKEN", raising=False)
    monkeypatch.delenv("APIFY_ACTOR_ID", raising=False)


@pytest.fixture
def no_network(monkeypatch: pytest.MonkeyPatch) -> None:
    """Fail the test if the client touches the network."""

    from src.mapscraper import apify_client

    def _fail(*_args: Any, **_kwargs: Any) -> None:
        raise AssertionError("unexpected network call")

    monkeypatch.setattr(apify_client.requests, "get", _fail)
    monkeypatch.setattr(apify_client.requests, "post", _fail)


@pytest.fixture
def fake_http(monkeypatch: pytest.MonkeyPatch) -> Callable[..., list]:
    """Install fake ``requests.get``/``requests.post`` and record calls.

    Usage: ``calls = fake_http(get=handler, post=handler)`` where each handler
    receives ``(url, params, json)`` and returns a ``FakeResponse``.
    """

    from src.mapscraper import apify_client

    def _install(get: Callable[..., FakeResponse] = None, post: Callable[..., FakeResponse] = None) -> list:
        calls: list = []

        def _get(url: str, params: Any = None, timeout: Any = None, **_kw: Any) -> FakeResponse:
            calls.append(("GET", url, params, None))
            if get is None:
                raise AssertionError("unexpected GET")
            return get(url, params, None)

        def _post(url: str, params: Any = None, json: Any = None, timeout: Any = None, **_kw: Any) -> FakeResponse:
            calls.append(("POST", url, params, json))
            if post is None:
                raise AssertionError("unexpected POST")
            return post(url, params, json)

        monkeypatch.setattr(apify_client.requests, "get", _get)
        monkeypatch.setattr(apify_client.requests, "post", _post)
        return calls

    return _install
