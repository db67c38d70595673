"""Strategy framework for oauthflow.

The main entry points are:

- :class:`OAuthStrategy` -- abstract base class for provider strategies.
- :class:`OAuth2Strategy` -- shared authorization-code flow.
- :class:`StrategyRegistry` -- maps provider tags to strategy classes.
- :func:`create_default_registry` -- registry pre-loaded with the built-in
  strategies.

Typical usage::

    from oauthflow.auth import create_default_registry

    strategy = create_default_registry().create("linkedin", config)
    error, result = await strategy.initiate_authorization({"scope": "r_liteprofile"})
"""

from oauthflow.auth.base import OAuthStrategy
from oauthflow.auth.manager import StrategyRegistry, create_default_registry
from oauthflow.auth.oauth2 import OAuth2Strategy, generate_state

__all__ = [
    "OAuth2Strategy",
    "OAuthStrategy",
    "StrategyRegistry",
    "create_default_registry",
    "generate_state",
]
