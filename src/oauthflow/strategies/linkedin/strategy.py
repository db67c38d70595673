"""LinkedIn strategy (OAuth2 authorization-code flow).

LinkedIn requires ``response_type=code`` on the authorization request and
``grant_type`` plus ``redirect_uri`` on the token request.
"""

from __future__ import annotations

from typing import Optional

from oauthflow.auth.oauth2 import OAuth2Strategy
from oauthflow.endpoints import Provider
from oauthflow.models import LinkedInAuthorizationOptions, LinkedInConfig


class LinkedInStrategy(OAuth2Strategy):
    """Authorize users through "Sign In with LinkedIn".

    Example::

        linkedin = LinkedInStrategy(LinkedInConfig(client_id="...",
                                                   client_secret="...",
                                                   redirect_uri="https://example.com/cb"))
        error, result = await linkedin.initiate_authorization(
            {"scope": "r_liteprofile r_emailaddress", "handle_state": True}
        )
    """

    config_model = LinkedInConfig
    options_model = LinkedInAuthorizationOptions

    @property
    def provider(self) -> Provider:
        return Provider.LINKEDIN

    def _authorization_params(self) -> dict[str, str]:
        params = super()._authorization_params()
        params["response_type"] = "code"
        return params

    def _token_request_data(self, code: str, state: Optional[str]) -> dict[str, str]:
        data = super()._token_request_data(code, state)
        data["grant_type"] = "authorization_code"
        data["redirect_uri"] = self.config.redirect_uri
        return data
