"""Exception hierarchy for oauthflow.

All strategy failures inherit from :class:`OAuthFlowError`, which carries a
``status`` attribute mapped to a constant from :mod:`oauthflow.status_codes`
plus the ``error`` / ``error_description`` pair used in the normalized
result body. Strategies raise these internally; the boundary in
:meth:`oauthflow.auth.base.OAuthStrategy._run` catches them and returns an
:class:`~oauthflow.models.OAuthResult` instead, so callers never see them.

Subclass hierarchy::

    OAuthFlowError              (status 400)
    +-- MissingClientCredentials (400)
    +-- StateMismatch            (400)
    +-- CallbackUnconfirmed      (400)
    +-- ProviderError            (provider status)
    +-- TransportError           (400)
    +-- UnexpectedError          (500)

:class:`ConfigError` is separate: it is raised by the configuration helpers
in :mod:`oauthflow.config`, which run before a strategy exists.
"""

from __future__ import annotations

from typing import Any

from oauthflow.models import ReturnValue
from oauthflow.status_codes import STATUS_BAD_REQUEST, STATUS_INTERNAL_ERROR


class OAuthFlowError(Exception):
    """Base exception for all strategy failures.

    Every subclass sets class-level ``status``, ``error`` and
    ``error_description`` defaults. Instances may override any of them.

    Args:
        error: Short error label placed in ``data["error"]``.
        error_description: Human-readable detail placed in
            ``data["error_description"]``.
        status: Optional override for the class-level status.
    """

    status: int = STATUS_BAD_REQUEST
    error: str = "OAuth flow failed"
    error_description: str = "Please try again later!"

    def __init__(
        self,
        error: str | None = None,
        error_description: str | None = None,
        status: int | None = None,
    ):
        if error is not None:
            self.error = error
        if error_description is not None:
            self.error_description = error_description
        if status is not None:
            self.status = status
        super().__init__(self.error)

    @property
    def data(self) -> Any:
        """The normalized body reported to the caller."""
        return {"error": self.error, "error_description": self.error_description}

    def to_return_value(self) -> ReturnValue:
        """Return the normalized ``{status, data}`` value for this failure."""
        return ReturnValue(status=self.status, data=self.data)


class MissingClientCredentials(OAuthFlowError):
    """Raised when the strategy was constructed with an empty credential field."""

    error = "Missing client credentials"
    error_description = (
        "Client credentials must be non-empty strings. "
        "Check the values passed to the strategy."
    )


class StateMismatch(OAuthFlowError):
    """Raised when the state echoed back by the provider differs from the one issued."""

    error = "State mismatch"
    error_description = (
        "The state value does not match the one generated for this "
        "authorization request."
    )


class CallbackUnconfirmed(OAuthFlowError):
    """Raised when Twitter reports ``oauth_callback_confirmed=false``."""

    error = "Callback is not confirmed by Twitter"
    error_description = (
        "The request token response did not confirm the callback URL."
    )


class ProviderError(OAuthFlowError):
    """Raised when the provider answers with an error status or error body.

    Unlike the other subclasses, the body reported to the caller is the
    provider's own (already parsed), not the ``error`` / ``error_description``
    pair.

    Args:
        status: The provider's HTTP status.
        body: Parsed response body (dict, or raw text when unparseable).
    """

    error = "Provider error"

    def __init__(self, status: int, body: Any):
        self.body = body
        error = None
        if isinstance(body, dict) and isinstance(body.get("error"), str):
            error = body["error"]
        super().__init__(error=error, status=status)

    @property
    def data(self) -> Any:
        return self.body


class TransportError(OAuthFlowError):
    """Raised when a request was sent but no response was received."""

    error = "Bad Request"


class UnexpectedError(OAuthFlowError):
    """Raised for any other local fault around the network call."""

    status = STATUS_INTERNAL_ERROR
    error = "Something went wrong"


class ConfigError(Exception):
    """Raised when provider configuration cannot be resolved (missing env var, unreadable file)."""
