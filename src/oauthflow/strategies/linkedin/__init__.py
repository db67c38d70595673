"""LinkedIn OAuth2 strategy.

Exports:
    :class:`LinkedInStrategy` -- authorization-code flow with
    ``response_type=code`` and optional managed CSRF state.
"""

from oauthflow.strategies.linkedin.strategy import LinkedInStrategy

__all__ = ["LinkedInStrategy"]
