"""Shared test fixtures for oauthflow.

Provides credential fixtures for each provider and a recording mock
transport so tests can assert exactly which outbound requests were made
(including that none were).
"""

from __future__ import annotations

from typing import Callable
from urllib.parse import parse_qsl

import httpx
import pytest

from oauthflow.models import GithubConfig, LinkedInConfig, TwitterConfig


Responder = Callable[[httpx.Request], httpx.Response]


class RecordingTransport:
    """Mock transport handler that records every request it receives."""

    def __init__(self, responder: Responder) -> None:
        self.requests: list[httpx.Request] = []
        self._responder = responder

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))

    @property
    def last_form(self) -> dict[str, str]:
        """Form body of the most recent request."""
        return dict(parse_qsl(self.requests[-1].content.decode("utf-8")))


def unreachable(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"unexpected outbound request: {request.method} {request.url}")


@pytest.fixture
def recorder_factory() -> Callable[[Responder], RecordingTransport]:
    return RecordingTransport


@pytest.fixture
def no_network() -> RecordingTransport:
    """A transport that fails the test if anything is sent through it."""
    return RecordingTransport(unreachable)


@pytest.fixture
def twitter_config() -> TwitterConfig:
    return TwitterConfig(
        consumer_key="k", consumer_secret="s", callback_url="https://a.test/cb"
    )


@pytest.fixture
def github_config() -> GithubConfig:
    return GithubConfig(
        client_id="gh-client",
        client_secret="gh-secret",
        redirect_uri="https://a.test/github/cb",
    )


@pytest.fixture
def linkedin_config() -> LinkedInConfig:
    return LinkedInConfig(
        client_id="li-client",
        client_secret="li-secret",
        redirect_uri="https://a.test/linkedin/cb",
    )
