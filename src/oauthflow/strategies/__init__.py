"""Built-in provider strategies.

- :class:`TwitterStrategy` -- OAuth1 three-legged flow.
- :class:`GithubStrategy` -- OAuth2 authorization-code flow.
- :class:`LinkedInStrategy` -- OAuth2 authorization-code flow.
"""

from oauthflow.strategies.github import GithubStrategy
from oauthflow.strategies.linkedin import LinkedInStrategy
from oauthflow.strategies.twitter import TwitterStrategy

__all__ = ["GithubStrategy", "LinkedInStrategy", "TwitterStrategy"]
