"""Error normalizer -- maps any failure into the ``{status, data}`` shape.

:func:`normalize_error` is the single place where exceptions become
:class:`~oauthflow.models.ReturnValue` instances. It understands the
library's own :class:`~oauthflow.exceptions.OAuthFlowError` hierarchy as well
as raw :mod:`httpx` exceptions, so a caller using the HTTP layer directly gets
the same shapes as the strategies return.

=================================  ==========================  ===========
Failure                            Mapped to                   Status
=================================  ==========================  ===========
:class:`OAuthFlowError` subclass   itself                      its own
:class:`httpx.HTTPStatusError`     ``ProviderError``           provider's
:class:`httpx.RequestError`        ``TransportError``          400
anything else                      ``UnexpectedError``         500
=================================  ==========================  ===========
"""

from __future__ import annotations

import httpx

from oauthflow.client.response import extract_error_message, parse_body
from oauthflow.exceptions import (
    OAuthFlowError,
    ProviderError,
    TransportError,
    UnexpectedError,
)
from oauthflow.models import ReturnValue


def to_flow_error(exc: BaseException) -> OAuthFlowError:
    """Classify *exc* into the :class:`OAuthFlowError` taxonomy."""
    if isinstance(exc, OAuthFlowError):
        return exc
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        return ProviderError(
            status=response.status_code,
            body=extract_error_message(parse_body(response)),
        )
    if isinstance(exc, httpx.RequestError):
        return TransportError()
    return UnexpectedError()


def normalize_error(exc: BaseException) -> ReturnValue:
    """Return the normalized ``{status, data}`` value for *exc*."""
    return to_flow_error(exc).to_return_value()
