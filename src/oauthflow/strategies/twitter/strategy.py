"""Twitter three-legged OAuth1 strategy.

The handshake runs in two calls on a :class:`TwitterStrategy`:

1. :meth:`~TwitterStrategy.initiate_authentication` signs a POST to
   ``request_token`` with the callback URL, checks that Twitter confirmed
   the callback, and returns the ``authenticate`` URL to redirect to.
2. :meth:`~TwitterStrategy.get_access_tokens` posts the ``oauth_token`` and
   ``oauth_verifier`` Twitter appended to the callback, and returns the
   final token set.

Flow states::

    created -> requesting_token -> awaiting_authorization -> completed
                      \\                      \\
                       +------> failed <------+

See Also:
    https://developer.twitter.com/en/docs/authentication/oauth-1-0a/obtaining-user-access-tokens
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable
from urllib.parse import parse_qsl

from oauthflow.auth.base import OAuthStrategy
from oauthflow.endpoints import Provider
from oauthflow.exceptions import CallbackUnconfirmed
from oauthflow.models import (
    AuthorizationRedirect,
    FlowState,
    OAuthResult,
    RequestToken,
    TwitterAccessTokenParams,
    TwitterConfig,
)
from oauthflow.signing import OAuth1Signer, generate_nonce
from oauthflow.status_codes import STATUS_OK

logger = logging.getLogger(__name__)


def _flat_params(text: str) -> dict[str, str]:
    return dict(parse_qsl(text, keep_blank_values=True))


class TwitterStrategy(OAuthStrategy):
    """Sign users in with Twitter (OAuth 1.0a).

    Args:
        config: :class:`~oauthflow.models.TwitterConfig` or a ``dict`` with
            ``consumer_key``, ``consumer_secret`` and ``callback_url``.
        clock: Unix time source for ``oauth_timestamp``.
        nonce_factory: Source of ``oauth_nonce`` values.
        **kwargs: Forwarded to :class:`~oauthflow.auth.base.OAuthStrategy`
            (``endpoints``, ``http_client``, ``request_config``).

    Example::

        twitter = TwitterStrategy({"consumer_key": "...",
                                   "consumer_secret": "...",
                                   "callback_url": "https://example.com/cb"})
        error, result = await twitter.initiate_authentication()
        # redirect to result.data["redirect_url"]; on callback:
        error, result = await twitter.get_access_tokens(oauth_token, oauth_verifier)
    """

    config_model = TwitterConfig

    def __init__(
        self,
        config: TwitterConfig | dict[str, Any] | None,
        *,
        clock: Callable[[], float] = time.time,
        nonce_factory: Callable[[], str] = generate_nonce,
        **kwargs: Any,
    ) -> None:
        super().__init__(config, **kwargs)
        self._signer = OAuth1Signer(
            self.config.consumer_key,
            self.config.consumer_secret,
            clock=clock,
            nonce_factory=nonce_factory,
        )

    @property
    def provider(self) -> Provider:
        return Provider.TWITTER

    async def initiate_authentication(self) -> OAuthResult:
        """Obtain a request token and build the redirect URL.

        Returns:
            On success, ``result.data`` is
            ``{"query_params": {...}, "redirect_url": "<authenticate>?<body>"}``
            where ``query_params`` is the decoded request-token response.
            A response with ``oauth_callback_confirmed=false`` fails with
            ``CallbackUnconfirmed``.
        """
        return await self._run(self._initiate_authentication)

    async def get_access_tokens(self, oauth_token: str, oauth_verifier: str) -> OAuthResult:
        """Exchange the authorized request token for access tokens.

        Args:
            oauth_token: ``oauth_token`` from the callback query string.
            oauth_verifier: ``oauth_verifier`` from the callback query string.

        Returns:
            On success, ``result.data`` is the decoded token response
            (``oauth_token``, ``oauth_token_secret``, ``user_id``,
            ``screen_name``).
        """
        return await self._run(lambda: self._exchange_verifier(oauth_token, oauth_verifier))

    async def _initiate_authentication(self) -> OAuthResult:
        self._require_credentials()
        self._transition(FlowState.REQUESTING_TOKEN)

        url = self.endpoints.request_token_url
        body = {"oauth_callback": self.config.callback_url}
        signed = self._signer.sign("POST", url, body)
        response = await self._http.post_form(url, body, signed.headers)

        raw = response.text
        query_params = _flat_params(raw)
        if query_params.get("oauth_callback_confirmed") == "false":
            raise CallbackUnconfirmed()
        request_token = RequestToken.model_validate(query_params)
        logger.debug(
            "Received request token (callback confirmed: %s)",
            request_token.oauth_callback_confirmed,
        )

        redirect = AuthorizationRedirect(
            url=f"{self.endpoints.authorize_url}?{raw}", query_params=query_params
        )
        self._transition(FlowState.AWAITING_AUTHORIZATION)
        return OAuthResult.success(STATUS_OK, redirect.model_dump(by_alias=True))

    async def _exchange_verifier(self, oauth_token: str, oauth_verifier: str) -> OAuthResult:
        self._require_credentials()
        params = TwitterAccessTokenParams(
            oauth_token=oauth_token, oauth_verifier=oauth_verifier
        )
        response = await self._http.post_form(
            self.endpoints.access_token_url, params.model_dump()
        )
        self._transition(FlowState.COMPLETED)
        return OAuthResult.success(STATUS_OK, _flat_params(response.text))
