"""Abstract base class for authentication strategies.

:class:`OAuthStrategy` holds what every provider strategy shares:

- the validated credential config, and the permanently disabled state that
  an empty credential field puts the instance in;
- the provider's endpoints (from :mod:`oauthflow.endpoints` unless
  overridden);
- the HTTP collaborator (:class:`~oauthflow.client.AsyncHttpClient`);
- the current :class:`~oauthflow.models.FlowState`;
- the result boundary, :meth:`OAuthStrategy._run`, which turns anything
  raised by an operation into an :class:`~oauthflow.models.OAuthResult`.

To implement a new strategy, subclass :class:`OAuthStrategy`, set
:attr:`~OAuthStrategy.config_model`, implement the :attr:`provider`
property, and route each public coroutine through :meth:`_run`.

See Also:
    :mod:`oauthflow.auth.oauth2` for the shared authorization-code flow.
    :mod:`oauthflow.auth.manager` for provider-to-strategy registration.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, ClassVar, Optional

import httpx
from pydantic import ValidationError

from oauthflow.client import AsyncHttpClient
from oauthflow.endpoints import Provider, ProviderEndpoints, get_endpoints
from oauthflow.exceptions import MissingClientCredentials, OAuthFlowError
from oauthflow.models import (
    ClientCredentials,
    FlowState,
    OAuthResult,
    RequestConfig,
)
from oauthflow.normalizer import normalize_error

logger = logging.getLogger(__name__)


class OAuthStrategy(ABC):
    """Abstract base class for provider strategies.

    Construction never raises. A config with any empty (or missing, or
    invalid) credential field leaves the strategy disabled:
    :attr:`credentials_valid` is False and every operation returns a
    ``MissingClientCredentials`` error without touching the network.

    Args:
        config: The provider's config model, or a ``dict`` of its fields.
        endpoints: Override for the registered provider endpoints.
        http_client: Caller-owned :class:`httpx.AsyncClient` for all
            outbound calls. When omitted, a short-lived client is opened per
            call using *request_config*.
        request_config: Timeout and SSL settings for short-lived clients.
    """

    config_model: ClassVar[type[ClientCredentials]]

    def __init__(
        self,
        config: ClientCredentials | dict[str, Any] | None,
        *,
        endpoints: Optional[ProviderEndpoints] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.config = self._load_config(config)
        self._credentials_valid = not self.config.is_empty()
        self._endpoints = endpoints or get_endpoints(self.provider)
        self._http = AsyncHttpClient(http_client, request_config)
        self._flow_state = FlowState.CREATED
        if not self._credentials_valid:
            logger.warning(
                "%s strategy created with empty client credentials; all operations are disabled",
                self.provider.value,
            )

    @property
    @abstractmethod
    def provider(self) -> Provider:
        """Return the provider tag this strategy talks to."""
        ...

    @property
    def credentials_valid(self) -> bool:
        """False if the strategy was constructed with an empty credential field."""
        return self._credentials_valid

    @property
    def flow_state(self) -> FlowState:
        return self._flow_state

    @property
    def endpoints(self) -> ProviderEndpoints:
        return self._endpoints

    # ------------------------------------------------------------------ #
    # Helpers for subclasses
    # ------------------------------------------------------------------ #

    def _load_config(self, config: Any) -> ClientCredentials:
        """Validate *config* into :attr:`config_model`, falling back to an empty config."""
        if isinstance(config, self.config_model):
            return config
        try:
            return self.config_model.model_validate(config or {})
        except ValidationError as exc:
            logger.warning(
                "Invalid %s config: %d validation error(s)",
                self.config_model.__name__,
                exc.error_count(),
            )
            return self.config_model()

    def _require_credentials(self) -> None:
        """Raise :class:`MissingClientCredentials` if the strategy is disabled."""
        if not self._credentials_valid:
            raise MissingClientCredentials()

    def _transition(self, state: FlowState) -> None:
        logger.debug(
            "%s flow: %s -> %s", self.provider.value, self._flow_state.value, state.value
        )
        self._flow_state = state

    async def _run(self, operation: Callable[[], Awaitable[OAuthResult]]) -> OAuthResult:
        """Await *operation* and normalize anything it raises.

        This is the only place strategy errors are caught. Each call
        resolves exactly once, either to the operation's own result or to
        :meth:`OAuthResult.failure`.
        """
        try:
            return await operation()
        except OAuthFlowError as exc:
            logger.warning(
                "%s operation failed: HTTP %d %s", self.provider.value, exc.status, exc.error
            )
            failure = normalize_error(exc)
        except Exception as exc:
            logger.exception("Unexpected error in %s strategy", self.provider.value)
            failure = normalize_error(exc)
        self._transition(FlowState.FAILED)
        return OAuthResult.failure(failure)
