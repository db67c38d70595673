"""Shared OAuth2 authorization-code flow (:rfc:`6749` section 4.1).

:class:`OAuth2Strategy` implements both steps of the flow and leaves the
provider differences to small hooks:

1. :meth:`~OAuth2Strategy.initiate_authorization` builds the authorize URL,
   optionally generating a CSRF ``state`` value and remembering it.
2. :meth:`~OAuth2Strategy.get_access_token` checks that state and exchanges
   the code at the token endpoint.

An instance remembers a single state value. Each call to
``initiate_authorization`` replaces it, so concurrent flows must use
separate instances (one per end-user session).
"""

from __future__ import annotations

import logging
import secrets
from typing import Any, ClassVar, Optional
from urllib.parse import quote, urlencode

from oauthflow.auth.base import OAuthStrategy
from oauthflow.client.response import parse_body
from oauthflow.exceptions import ProviderError, StateMismatch
from oauthflow.models import AuthorizationOptions, FlowState, OAuthResult
from oauthflow.status_codes import STATUS_BAD_REQUEST, STATUS_OK

logger = logging.getLogger(__name__)


def generate_state() -> str:
    """Return a random, URL-safe CSRF state value."""
    return secrets.token_urlsafe(16)


class OAuth2Strategy(OAuthStrategy):
    """Base for authorization-code providers.

    Subclasses set :attr:`options_model` and override
    :meth:`_authorization_params` and :meth:`_token_request_data` where the
    provider needs more than ``client_id`` / ``redirect_uri`` / ``code``.
    """

    options_model: ClassVar[type[AuthorizationOptions]] = AuthorizationOptions

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._state: Optional[str] = None
        self._handle_state = False

    @property
    def handle_state(self) -> bool:
        """True if the last authorization request asked for managed state."""
        return self._handle_state

    async def initiate_authorization(
        self, options: AuthorizationOptions | dict[str, Any] | None = None
    ) -> OAuthResult:
        """Build the URL to send the end user to.

        Empty-string options are dropped. ``client_id`` and ``redirect_uri``
        always come from the strategy's config. With ``handle_state=True`` a
        fresh state value is generated, stored on the instance and added to
        the query, replacing any earlier one.

        Args:
            options: An instance of :attr:`options_model` or a ``dict`` of
                its fields.

        Returns:
            On success, ``result.data == {"auth_url": <url>}``.
        """
        return await self._run(lambda: self._initiate_authorization(options))

    async def get_access_token(self, code: str, state: Optional[str] = None) -> OAuthResult:
        """Exchange an authorization code for an access token.

        Args:
            code: The ``code`` query parameter the provider redirected back with.
            state: The ``state`` query parameter. Required to match when the
                authorization request used ``handle_state=True``.

        Returns:
            On success, ``result.data`` is the provider's token payload.
        """
        return await self._run(lambda: self._exchange_code(code, state))

    # ------------------------------------------------------------------ #
    # Provider hooks
    # ------------------------------------------------------------------ #

    def _authorization_params(self) -> dict[str, str]:
        """Parameters every authorization request carries."""
        return {
            "client_id": self.config.client_id,
            "redirect_uri": self.config.redirect_uri,
        }

    def _token_request_data(self, code: str, state: Optional[str]) -> dict[str, str]:
        """Form body for the token request."""
        return {
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "code": code,
        }

    # ------------------------------------------------------------------ #
    # Flow
    # ------------------------------------------------------------------ #

    async def _initiate_authorization(
        self, options: AuthorizationOptions | dict[str, Any] | None
    ) -> OAuthResult:
        self._require_credentials()
        opts = self._validate_options(options)

        params: dict[str, str] = {
            key: value
            for key, value in opts.model_dump(
                exclude={"handle_state"}, exclude_none=True
            ).items()
            if value != ""
        }
        params.update(self._authorization_params())

        self._handle_state = opts.handle_state
        if opts.handle_state:
            self._state = generate_state()
            params["state"] = self._state
        else:
            self._state = None

        auth_url = f"{self.endpoints.authorize_url}?{urlencode(params, quote_via=quote)}"
        logger.debug(
            "Built %s authorization URL (managed state: %s)",
            self.provider.value,
            opts.handle_state,
        )
        self._transition(FlowState.AUTHORIZATION_URL_ISSUED)
        return OAuthResult.success(STATUS_OK, {"auth_url": auth_url})

    async def _exchange_code(
        self,
        code: str,
        state: Optional[str],
        headers: Optional[dict[str, str]] = None,
    ) -> OAuthResult:
        self._require_credentials()
        self._check_state(state)

        response = await self._http.post_form(
            self.endpoints.access_token_url,
            self._token_request_data(code, state),
            headers or {"Accept": "application/json"},
        )
        payload = parse_body(response)
        # GitHub reports bad or expired codes with a 200 and an error body.
        if isinstance(payload, dict) and "error" in payload:
            raise ProviderError(status=STATUS_BAD_REQUEST, body=payload)

        if self._handle_state:
            self._state = None
        self._transition(FlowState.COMPLETED)
        return OAuthResult.success(STATUS_OK, payload)

    def _check_state(self, state: Optional[str]) -> None:
        if not self._handle_state:
            return
        if self._state is None or state != self._state:
            raise StateMismatch()

    def _validate_options(
        self, options: AuthorizationOptions | dict[str, Any] | None
    ) -> AuthorizationOptions:
        if isinstance(options, self.options_model):
            return options
        if isinstance(options, AuthorizationOptions):
            options = options.model_dump()
        return self.options_model.model_validate(options or {})
