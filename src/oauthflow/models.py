"""Canonical data shapes shared across all oauthflow modules.

The models fall into three groups:

**Client configuration** -- what a caller passes to a strategy:
    :class:`ClientCredentials`, :class:`TwitterConfig`, :class:`GithubConfig`,
    :class:`LinkedInConfig`, and :class:`RequestConfig`.

**Operation inputs** -- options and parameters for the public operations:
    :class:`TwitterAccessTokenParams`, :class:`GithubAuthorizationOptions`,
    and :class:`LinkedInAuthorizationOptions`.

**Derived values and results** -- produced by the strategies:
    :class:`RequestToken`, :class:`AuthorizationRedirect`,
    :class:`SignedRequest`, :class:`ReturnValue`, :class:`OAuthResult`, and
    :class:`FlowState`.

Wherever a public operation accepts one of the input models it also accepts
a plain ``dict``, which is validated into the model.
"""

from __future__ import annotations

import enum
from typing import Any, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Client configuration ---


class ClientCredentials(BaseModel):
    """Base for provider credential sets.

    Every field is a string defaulting to ``""`` so that an omitted field
    behaves exactly like an empty one: the strategy is disabled rather than
    failing at construction.
    """

    model_config = ConfigDict(frozen=True)

    def is_empty(self) -> bool:
        """Return True if any credential field is an empty string."""
        return any(value == "" for value in self.model_dump().values())


class TwitterConfig(ClientCredentials):
    """Consumer credentials from the Twitter developer portal.

    Example::

        TwitterConfig(
            consumer_key="xvz1evFS4wEEPTGEFPHBog",
            consumer_secret="kAcSOqF21Fu85e7zjz7ZN2U4ZRhfV3WpwPAoE3Z7kBw",
            callback_url="https://example.com/auth/twitter/callback",
        )
    """

    consumer_key: str = ""
    consumer_secret: str = ""
    callback_url: str = Field(default="", description="Absolute callback URL")


class OAuth2Config(ClientCredentials):
    """Client credentials for an OAuth2 authorization-code provider."""

    client_id: str = ""
    client_secret: str = ""
    redirect_uri: str = Field(
        default="", description="One of the redirect URLs registered for the app"
    )


class GithubConfig(OAuth2Config):
    """Client credentials from the General tab of a GitHub OAuth app."""


class LinkedInConfig(OAuth2Config):
    """Client credentials from the LinkedIn developer portal."""


class RequestConfig(BaseModel):
    """Settings for HTTP clients the library opens itself.

    An injected ``httpx.AsyncClient`` keeps its own settings; these apply
    only when a strategy has to open a short-lived client per call.
    """

    timeout: Optional[float] = Field(
        default=None, description="Request timeout in seconds, None for no limit"
    )
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


# --- Operation inputs ---


class TwitterAccessTokenParams(BaseModel):
    """Values Twitter appends to the callback URL once the user authorizes the app."""

    oauth_token: str
    oauth_verifier: str


class AuthorizationOptions(BaseModel):
    """Options shared by the OAuth2 authorization requests.

    ``handle_state`` asks the strategy to generate the CSRF state value
    itself and verify it during the token exchange. An explicit ``state`` is
    passed through untouched when ``handle_state`` is False.

    Undeclared options (LinkedIn's ``prompt``, for instance) are kept and
    sent to the provider as they are.
    """

    model_config = ConfigDict(extra="allow")

    scope: Optional[str] = Field(default=None, description="Space separated scopes")
    state: Optional[str] = None
    handle_state: bool = False


class GithubAuthorizationOptions(AuthorizationOptions):
    """Query options for GitHub's ``authorize`` endpoint."""

    login: Optional[str] = Field(
        default=None, description="Suggest a specific account for signing in"
    )
    allow_signup: Optional[str] = Field(
        default=None, description="Offer unauthenticated users a sign-up option"
    )


class LinkedInAuthorizationOptions(AuthorizationOptions):
    """Query options for LinkedIn's ``authorization`` endpoint."""


# --- Derived values and results ---


class RequestToken(BaseModel):
    """Temporary credentials returned by Twitter's ``request_token`` endpoint."""

    oauth_token: str
    oauth_token_secret: str
    oauth_callback_confirmed: bool = True


class AuthorizationRedirect(BaseModel):
    """Where to send the end user, and the query parameters that URL carries."""

    url: str = Field(serialization_alias="redirect_url")
    query_params: dict[str, str] = Field(default_factory=dict)


class SignedRequest(BaseModel):
    """A single-use OAuth1-signed request description. Never reused."""

    url: str
    method: str
    headers: dict[str, str]


class ReturnValue(BaseModel):
    """The ``{status, data}`` shape of both success and error results."""

    status: int
    data: Any = None


class OAuthResult(NamedTuple):
    """Two-slot outcome of a strategy operation.

    Exactly one of ``error`` and ``result`` is set. Build instances with
    :meth:`success` or :meth:`failure`. Unpacks like a tuple::

        error, result = await strategy.initiate_authentication()
    """

    error: Optional[ReturnValue]
    result: Optional[ReturnValue]

    @classmethod
    def success(cls, status: int, data: Any) -> OAuthResult:
        return cls(error=None, result=ReturnValue(status=status, data=data))

    @classmethod
    def failure(cls, value: ReturnValue) -> OAuthResult:
        return cls(error=value, result=None)

    @property
    def ok(self) -> bool:
        return self.error is None


class FlowState(str, enum.Enum):
    """Where a strategy instance is in its authorization flow."""

    CREATED = "created"
    REQUESTING_TOKEN = "requesting_token"
    AWAITING_AUTHORIZATION = "awaiting_authorization"
    AUTHORIZATION_URL_ISSUED = "authorization_url_issued"
    COMPLETED = "completed"
    FAILED = "failed"
