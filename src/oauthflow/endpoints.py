"""Provider endpoint registry.

A read-only table mapping each :class:`Provider` to the URLs its strategy
talks to. The table is built once at import time and wrapped in a
:class:`types.MappingProxyType`; the entries themselves are frozen models.

Strategies take their endpoints from here unless the caller passes an
explicit :class:`ProviderEndpoints` (useful for GitHub Enterprise or for
pointing tests at a local server).
"""

from __future__ import annotations

import enum
from types import MappingProxyType
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict


class Provider(str, enum.Enum):
    """Supported providers."""

    TWITTER = "twitter"
    GITHUB = "github"
    LINKEDIN = "linkedin"


class ProviderEndpoints(BaseModel):
    """Endpoint URLs for one provider.

    ``request_token_url`` is only set for OAuth1 providers.
    ``authorize_url`` is the browser redirect target and is never called
    by the library itself.
    """

    model_config = ConfigDict(frozen=True)

    authorize_url: str
    access_token_url: str
    request_token_url: Optional[str] = None


ENDPOINTS: Mapping[Provider, ProviderEndpoints] = MappingProxyType(
    {
        Provider.TWITTER: ProviderEndpoints(
            request_token_url="https://api.twitter.com/oauth/request_token",
            authorize_url="https://api.twitter.com/oauth/authenticate",
            access_token_url="https://api.twitter.com/oauth/access_token",
        ),
        Provider.GITHUB: ProviderEndpoints(
            authorize_url="https://github.com/login/oauth/authorize",
            access_token_url="https://github.com/login/oauth/access_token",
        ),
        Provider.LINKEDIN: ProviderEndpoints(
            authorize_url="https://www.linkedin.com/oauth/v2/authorization",
            access_token_url="https://www.linkedin.com/oauth/v2/accessToken",
        ),
    }
)


def get_endpoints(provider: Provider | str) -> ProviderEndpoints:
    """Look up the endpoints for *provider*.

    Args:
        provider: A :class:`Provider` member or its string value
            (e.g. ``"github"``).

    Returns:
        The registered :class:`ProviderEndpoints`.

    Raises:
        KeyError: If the provider is unknown.
    """
    try:
        return ENDPOINTS[Provider(provider)]
    except ValueError:
        raise KeyError(f"Unknown provider '{provider}'") from None
