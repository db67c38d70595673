"""Strategy registry -- maps provider tags to strategy classes.

The :class:`StrategyRegistry` lets callers pick a strategy by name, which
is convenient when the provider comes from a route parameter or a config
file. For most uses, :func:`create_default_registry` returns a registry
pre-loaded with every built-in strategy.

See Also:
    :class:`~oauthflow.auth.base.OAuthStrategy` -- the strategy interface.
"""

from __future__ import annotations

from typing import Any

from oauthflow.auth.base import OAuthStrategy
from oauthflow.endpoints import Provider
from oauthflow.models import ClientCredentials


class StrategyRegistry:
    """Registry of strategy classes keyed by :class:`~oauthflow.endpoints.Provider`.

    Example::

        registry = create_default_registry()
        strategy = registry.create("github", {"client_id": "...",
                                              "client_secret": "...",
                                              "redirect_uri": "..."})
    """

    def __init__(self) -> None:
        self._strategies: dict[Provider, type[OAuthStrategy]] = {}

    def register(self, provider: Provider | str, strategy_cls: type[OAuthStrategy]) -> None:
        """Register *strategy_cls* for *provider*, replacing any earlier entry."""
        self._strategies[Provider(provider)] = strategy_cls

    def get(self, provider: Provider | str) -> type[OAuthStrategy]:
        """Return the strategy class registered for *provider*.

        Raises:
            KeyError: If the provider is unknown or has no registered class.
        """
        try:
            key = Provider(provider)
        except ValueError:
            key = None
        if key is None or key not in self._strategies:
            available = ", ".join(self.list_providers()) or "(none)"
            raise KeyError(
                f"No strategy registered for provider '{provider}'. "
                f"Available providers: {available}"
            )
        return self._strategies[key]

    def create(
        self,
        provider: Provider | str,
        config: ClientCredentials | dict[str, Any] | None,
        **kwargs: Any,
    ) -> OAuthStrategy:
        """Instantiate the strategy for *provider*.

        Args:
            provider: Provider tag.
            config: Credential config for the strategy.
            **kwargs: Forwarded to the strategy constructor.
        """
        return self.get(provider)(config, **kwargs)

    def list_providers(self) -> list[str]:
        """Return the sorted tags of all registered providers."""
        return sorted(p.value for p in self._strategies)


def create_default_registry() -> StrategyRegistry:
    """Create a :class:`StrategyRegistry` with the Twitter, GitHub and LinkedIn strategies."""
    from oauthflow.strategies.github import GithubStrategy
    from oauthflow.strategies.linkedin import LinkedInStrategy
    from oauthflow.strategies.twitter import TwitterStrategy

    registry = StrategyRegistry()
    registry.register(Provider.TWITTER, TwitterStrategy)
    registry.register(Provider.GITHUB, GithubStrategy)
    registry.register(Provider.LINKEDIN, LinkedInStrategy)
    return registry
