"""GitHub OAuth2 strategy.

Exports:
    :class:`GithubStrategy` -- authorization-code flow against a GitHub
    OAuth app, with optional managed CSRF state.
"""

from oauthflow.strategies.github.strategy import GithubStrategy

__all__ = ["GithubStrategy"]
