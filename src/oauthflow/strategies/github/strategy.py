"""GitHub OAuth app strategy (authorization-code flow).

GitHub's token endpoint answers in JSON by default and in XML when asked
with ``Accept: application/xml``. Both are decoded into a flat ``dict``.
A rejected code comes back as HTTP 200 with an ``error`` field and is
reported as a provider error.

See Also:
    https://docs.github.com/en/apps/oauth-apps/building-oauth-apps/authorizing-oauth-apps
"""

from __future__ import annotations

from typing import Any, Optional

from oauthflow.auth.oauth2 import OAuth2Strategy
from oauthflow.endpoints import Provider
from oauthflow.models import (
    GithubAuthorizationOptions,
    GithubConfig,
    OAuthResult,
)


class GithubStrategy(OAuth2Strategy):
    """Authorize users through a GitHub OAuth app.

    Example::

        github = GithubStrategy(
            {"client_id": "...", "client_secret": "...",
             "redirect_uri": "https://example.com/auth/github/callback"}
        )
        error, result = await github.initiate_authorization(
            {"scope": "repo", "handle_state": True}
        )
        # redirect to result.data["auth_url"], then on callback:
        error, result = await github.get_access_token(code, state)
    """

    config_model = GithubConfig
    options_model = GithubAuthorizationOptions

    @property
    def provider(self) -> Provider:
        return Provider.GITHUB

    async def initiate_authorization(
        self, options: GithubAuthorizationOptions | dict[str, Any] | None = None
    ) -> OAuthResult:
        """Build the ``authorize`` URL.

        Supported options: ``login``, ``scope``, ``state``, ``allow_signup``
        and ``handle_state``.
        """
        return await super().initiate_authorization(options)

    async def get_access_token(
        self,
        code: str,
        state: Optional[str] = None,
        return_as_xml: bool = False,
    ) -> OAuthResult:
        """Exchange *code* for a user access token.

        Args:
            code: Authorization code sent back by GitHub.
            state: State sent back by GitHub; must match when state is managed.
            return_as_xml: Ask GitHub for an XML response instead of JSON.

        Returns:
            On success, ``result.data`` holds ``access_token``, ``scope`` and
            ``token_type``.
        """
        accept = "application/xml" if return_as_xml else "application/json"
        return await self._run(
            lambda: self._exchange_code(code, state, headers={"Accept": accept})
        )

    def _token_request_data(self, code: str, state: Optional[str]) -> dict[str, str]:
        data = super()._token_request_data(code, state)
        if state:
            data["state"] = state
        return data
