"""HTTP-like status codes carried in every :class:`~oauthflow.models.ReturnValue`.

Each constant maps to a category of outcome and is referenced by the
corresponding :class:`~oauthflow.exceptions.OAuthFlowError` subclass.
Provider failures are the exception: they carry whatever status the
provider answered with.

Example::

    error, result = await strategy.get_access_token(code="abc")
    if error is not None and error.status == STATUS_BAD_REQUEST:
        ...  # locally rejected, or the provider was unreachable
"""

STATUS_OK = 200
"""The operation completed and ``data`` holds the provider payload."""

STATUS_BAD_REQUEST = 400
"""Rejected locally (missing credentials, state mismatch, unconfirmed callback) or no response was received."""

STATUS_INTERNAL_ERROR = 500
"""An unexpected local fault occurred before or after the network call."""
