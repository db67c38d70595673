"""Tests for the Twitter OAuth1 strategy."""

from __future__ import annotations

import re
from urllib.parse import unquote

import httpx
import pytest

from oauthflow.endpoints import ProviderEndpoints
from oauthflow.models import FlowState, TwitterConfig
from oauthflow.signing import build_base_string, hmac_sha1_signature
from oauthflow.strategies.twitter import TwitterStrategy


REQUEST_TOKEN_URL = "https://api.twitter.com/oauth/request_token"
AUTHENTICATE_URL = "https://api.twitter.com/oauth/authenticate"
ACCESS_TOKEN_URL = "https://api.twitter.com/oauth/access_token"
REQUEST_TOKEN_BODY = "oauth_token=T&oauth_token_secret=S&oauth_callback_confirmed=true"


def _strategy(
    config: TwitterConfig | dict[str, str], client: httpx.AsyncClient | None = None, **kwargs: object
) -> TwitterStrategy:
    return TwitterStrategy(
        config,
        clock=lambda: 1700000000,
        nonce_factory=lambda: "fixednonce",
        http_client=client,
        **kwargs,  # type: ignore[arg-type]
    )


def _header_fields(header: str) -> dict[str, str]:
    return {k: unquote(v) for k, v in re.findall(r'(\w+)="([^"]*)"', header)}


def _form_response(body: str, status_code: int = 200) -> httpx.Response:
    """Build a form-encoded response, labelled the way Twitter labels it."""
    return httpx.Response(
        status_code,
        headers={"content-type": "text/html; charset=utf-8"},
        content=body.encode("utf-8"),
    )


def _json_response(data: object, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=data)


# ---------------------------------------------------------------------------
# Missing credentials
# ---------------------------------------------------------------------------


class TestMissingCredentials:
    @pytest.mark.parametrize(
        "config",
        [
            {"consumer_key": "", "consumer_secret": "s", "callback_url": "https://a.test/cb"},
            {"consumer_key": "k", "consumer_secret": "", "callback_url": "https://a.test/cb"},
            {"consumer_key": "k", "consumer_secret": "s", "callback_url": ""},
            {"consumer_key": "k", "consumer_secret": "s"},
            {"consumer_key": 1, "consumer_secret": "s", "callback_url": "https://a.test/cb"},
            None,
        ],
    )
    @pytest.mark.asyncio
    async def test_every_operation_short_circuits(
        self, config: dict[str, object] | None, no_network
    ) -> None:
        async with no_network.client() as client:
            strategy = _strategy(config, client)  # type: ignore[arg-type]
            assert strategy.credentials_valid is False

            error, result = await strategy.initiate_authentication()
            assert result is None
            assert error is not None
            assert error.status == 400
            assert error.data["error"] == "Missing client credentials"

            error, result = await strategy.get_access_tokens("T", "V")
            assert result is None
            assert error is not None
            assert error.data["error"] == "Missing client credentials"

        assert no_network.requests == []
        assert strategy.flow_state is FlowState.FAILED


# ---------------------------------------------------------------------------
# initiate_authentication
# ---------------------------------------------------------------------------


class TestInitiateAuthentication:
    @pytest.mark.asyncio
    async def test_builds_redirect_url(
        self, twitter_config: TwitterConfig, recorder_factory
    ) -> None:
        recorder = recorder_factory(lambda request: _form_response(REQUEST_TOKEN_BODY))
        async with recorder.client() as client:
            strategy = _strategy(twitter_config, client)
            error, result = await strategy.initiate_authentication()

        assert error is None
        assert result is not None
        assert result.status == 200
        redirect_url = result.data["redirect_url"]
        assert redirect_url.startswith(AUTHENTICATE_URL)
        assert "oauth_token=T" in redirect_url
        assert redirect_url == f"{AUTHENTICATE_URL}?{REQUEST_TOKEN_BODY}"
        assert result.data["query_params"] == {
            "oauth_token": "T",
            "oauth_token_secret": "S",
            "oauth_callback_confirmed": "true",
        }
        assert strategy.flow_state is FlowState.AWAITING_AUTHORIZATION

    @pytest.mark.asyncio
    async def test_sends_signed_post_with_callback(
        self, twitter_config: TwitterConfig, recorder_factory
    ) -> None:
        recorder = recorder_factory(lambda request: _form_response(REQUEST_TOKEN_BODY))
        async with recorder.client() as client:
            await _strategy(twitter_config, client).initiate_authentication()

        assert len(recorder.requests) == 1
        request = recorder.requests[0]
        assert request.method == "POST"
        assert str(request.url) == REQUEST_TOKEN_URL
        assert recorder.last_form == {"oauth_callback": "https://a.test/cb"}

        fields = _header_fields(request.headers["Authorization"])
        assert fields["oauth_consumer_key"] == "k"
        assert fields["oauth_nonce"] == "fixednonce"
        assert fields["oauth_timestamp"] == "1700000000"
        expected_base = build_base_string(
            "POST",
            REQUEST_TOKEN_URL,
            [
                ("oauth_callback", "https://a.test/cb"),
                ("oauth_consumer_key", "k"),
                ("oauth_nonce", "fixednonce"),
                ("oauth_signature_method", "HMAC-SHA1"),
                ("oauth_timestamp", "1700000000"),
                ("oauth_version", "1.0"),
            ],
        )
        assert fields["oauth_signature"] == hmac_sha1_signature("s&", expected_base)

    @pytest.mark.asyncio
    async def test_callback_unconfirmed(
        self, twitter_config: TwitterConfig, recorder_factory
    ) -> None:
        recorder = recorder_factory(
            lambda request: _form_response(
                "oauth_token=T&oauth_token_secret=S&oauth_callback_confirmed=false"
            )
        )
        async with recorder.client() as client:
            strategy = _strategy(twitter_config, client)
            error, result = await strategy.initiate_authentication()

        assert result is None
        assert error is not None
        assert error.status == 400
        assert error.data["error"] == "Callback is not confirmed by Twitter"
        assert strategy.flow_state is FlowState.FAILED

    @pytest.mark.asyncio
    async def test_callback_unconfirmed_even_without_tokens(
        self, twitter_config: TwitterConfig, recorder_factory
    ) -> None:
        recorder = recorder_factory(
            lambda request: _form_response("oauth_callback_confirmed=false")
        )
        async with recorder.client() as client:
            error, _ = await _strategy(twitter_config, client).initiate_authentication()

        assert error is not None
        assert error.data["error"] == "Callback is not confirmed by Twitter"

    @pytest.mark.asyncio
    async def test_provider_error_extracts_first_message(
        self, twitter_config: TwitterConfig, recorder_factory
    ) -> None:
        body = {"errors": [{"code": 32, "message": "Could not authenticate you."}]}
        recorder = recorder_factory(lambda request: _json_response(body, status_code=401))
        async with recorder.client() as client:
            error, result = await _strategy(twitter_config, client).initiate_authentication()

        assert result is None
        assert error is not None
        assert error.status == 401
        assert error.data["error"] == "Could not authenticate you."
        assert error.data["errors"] == body["errors"]

    @pytest.mark.asyncio
    async def test_transport_error(
        self, twitter_config: TwitterConfig, recorder_factory
    ) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        recorder = recorder_factory(refuse)
        async with recorder.client() as client:
            error, result = await _strategy(twitter_config, client).initiate_authentication()

        assert result is None
        assert error is not None
        assert error.status == 400
        assert error.data["error"] == "Bad Request"

    @pytest.mark.asyncio
    async def test_malformed_response_is_unexpected_error(
        self, twitter_config: TwitterConfig, recorder_factory
    ) -> None:
        recorder = recorder_factory(lambda request: _form_response("oauth_callback_confirmed=true"))
        async with recorder.client() as client:
            error, result = await _strategy(twitter_config, client).initiate_authentication()

        assert result is None
        assert error is not None
        assert error.status == 500
        assert error.data["error"] == "Something went wrong"

    @pytest.mark.asyncio
    async def test_endpoint_override(
        self, twitter_config: TwitterConfig, recorder_factory
    ) -> None:
        endpoints = ProviderEndpoints(
            request_token_url="https://mock.test/request_token",
            authorize_url="https://mock.test/authenticate",
            access_token_url="https://mock.test/access_token",
        )
        recorder = recorder_factory(lambda request: _form_response(REQUEST_TOKEN_BODY))
        async with recorder.client() as client:
            strategy = _strategy(twitter_config, client, endpoints=endpoints)
            _, result = await strategy.initiate_authentication()

        assert str(recorder.requests[0].url) == "https://mock.test/request_token"
        assert result is not None
        assert result.data["redirect_url"].startswith("https://mock.test/authenticate?")


# ---------------------------------------------------------------------------
# get_access_tokens
# ---------------------------------------------------------------------------


class TestGetAccessTokens:
    @pytest.mark.asyncio
    async def test_exchanges_verifier(
        self, twitter_config: TwitterConfig, recorder_factory
    ) -> None:
        recorder = recorder_factory(
            lambda request: _form_response(
                "oauth_token=AT&oauth_token_secret=ATS&user_id=42&screen_name=someone"
            )
        )
        async with recorder.client() as client:
            strategy = _strategy(twitter_config, client)
            error, result = await strategy.get_access_tokens("T", "V")

        assert error is None
        assert result is not None
        assert result.status == 200
        assert result.data == {
            "oauth_token": "AT",
            "oauth_token_secret": "ATS",
            "user_id": "42",
            "screen_name": "someone",
        }
        request = recorder.requests[0]
        assert str(request.url) == ACCESS_TOKEN_URL
        assert request.method == "POST"
        assert recorder.last_form == {"oauth_token": "T", "oauth_verifier": "V"}
        assert "Authorization" not in request.headers
        assert strategy.flow_state is FlowState.COMPLETED

    @pytest.mark.asyncio
    async def test_full_handshake(self, twitter_config: TwitterConfig, recorder_factory) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("request_token"):
                return _form_response(REQUEST_TOKEN_BODY)
            return _form_response("oauth_token=AT&oauth_token_secret=ATS")

        recorder = recorder_factory(respond)
        async with recorder.client() as client:
            strategy = _strategy(twitter_config, client)
            _, started = await strategy.initiate_authentication()
            assert started is not None
            oauth_token = started.data["query_params"]["oauth_token"]
            error, result = await strategy.get_access_tokens(oauth_token, "verifier")

        assert error is None
        assert result is not None
        assert result.data["oauth_token"] == "AT"
        assert len(recorder.requests) == 2

    @pytest.mark.asyncio
    async def test_provider_rejects_verifier(
        self, twitter_config: TwitterConfig, recorder_factory
    ) -> None:
        recorder = recorder_factory(
            lambda request: _form_response("Error processing your OAuth request: Invalid oauth_verifier parameter", 401)
        )
        async with recorder.client() as client:
            error, result = await _strategy(twitter_config, client).get_access_tokens("T", "bad")

        assert result is None
        assert error is not None
        assert error.status == 401
        assert error.data == "Error processing your OAuth request: Invalid oauth_verifier parameter"
