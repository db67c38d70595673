"""Twitter OAuth1 strategy.

Exports:
    :class:`TwitterStrategy` -- three-legged OAuth 1.0a handshake with
    HMAC-SHA1 signed request-token calls.
"""

from oauthflow.strategies.twitter.strategy import TwitterStrategy

__all__ = ["TwitterStrategy"]
