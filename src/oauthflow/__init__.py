"""oauthflow -- client-side OAuth1 and OAuth2 authentication strategies.

This package builds authorization redirects and exchanges temporary
credentials for access tokens against Twitter (OAuth 1.0a, HMAC-SHA1
signed), GitHub and LinkedIn (OAuth2 authorization code). It stops once the
access token response is obtained: storing tokens, sessions and refresh are
left to the caller.

Every public operation is a coroutine returning an :class:`OAuthResult`,
a two-slot tuple in which exactly one of ``error`` and ``result`` is set::

    from oauthflow import TwitterStrategy

    twitter = TwitterStrategy({"consumer_key": "...", "consumer_secret": "...",
                               "callback_url": "https://example.com/cb"})
    error, result = await twitter.initiate_authentication()

Modules:
    models: Pydantic models shared across the package.
    signing: OAuth1 HMAC-SHA1 request signing.
    endpoints: Provider endpoint registry.
    normalizer: Maps failures into the ``{status, data}`` shape.
    exceptions: Error taxonomy with status mapping.
    config: Credential resolution from env vars and files.
"""

from oauthflow.auth import OAuthStrategy, StrategyRegistry, create_default_registry
from oauthflow.endpoints import Provider
from oauthflow.models import OAuthResult, ReturnValue
from oauthflow.strategies import GithubStrategy, LinkedInStrategy, TwitterStrategy

__version__ = "0.1.0"

__all__ = [
    "GithubStrategy",
    "LinkedInStrategy",
    "OAuthResult",
    "OAuthStrategy",
    "Provider",
    "ReturnValue",
    "StrategyRegistry",
    "TwitterStrategy",
    "create_default_registry",
]
