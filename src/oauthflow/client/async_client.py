"""Asynchronous HTTP collaborator used by every strategy.

:class:`AsyncHttpClient` wraps :class:`httpx.AsyncClient`. It either uses a
client injected by the caller (who then owns its timeout, proxies and
lifetime) or opens a short-lived client for each call from a
:class:`~oauthflow.models.RequestConfig`.

Each call makes exactly one attempt. Failures are mapped to the error
taxonomy before they leave this module:

- a response with status >= 400 raises
  :class:`~oauthflow.exceptions.ProviderError` carrying the parsed body;
- an :class:`httpx.RequestError` (nothing received) raises
  :class:`~oauthflow.exceptions.TransportError`.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from oauthflow.client.response import extract_error_message, parse_body
from oauthflow.exceptions import ProviderError, TransportError
from oauthflow.models import RequestConfig

logger = logging.getLogger(__name__)


class AsyncHttpClient:
    """Single-attempt form POSTs against provider endpoints.

    Args:
        client: Optional caller-owned :class:`httpx.AsyncClient`. It is never
            closed by this class.
        request_config: Settings for the short-lived clients opened when no
            *client* is given.

    Example::

        http = AsyncHttpClient()
        response = await http.post_form(url, {"code": code})
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self._client = client
        self._config = request_config or RequestConfig()

    async def post_form(
        self,
        url: str,
        data: dict[str, Any],
        headers: Optional[dict[str, str]] = None,
    ) -> httpx.Response:
        """POST *data* form-encoded to *url*.

        Args:
            url: Absolute endpoint URL.
            data: Form fields.
            headers: Extra request headers.

        Returns:
            The :class:`httpx.Response` for any status below 400.

        Raises:
            ProviderError: The provider answered with status >= 400.
            TransportError: No response was received.
        """
        logger.debug("POST %s", url)
        try:
            if self._client is not None:
                response = await self._client.post(url, data=data, headers=headers)
            else:
                async with httpx.AsyncClient(
                    timeout=self._config.timeout, verify=self._config.verify_ssl
                ) as client:
                    response = await client.post(url, data=data, headers=headers)
        except httpx.RequestError as exc:
            logger.warning("No response from %s: %s", url, exc)
            raise TransportError() from exc

        logger.debug("POST %s -> HTTP %d", url, response.status_code)
        self._raise_for_status(response)
        return response

    def _raise_for_status(self, response: httpx.Response) -> None:
        """Raise :class:`ProviderError` for error HTTP status codes."""
        if response.status_code < 400:
            return
        body = extract_error_message(parse_body(response))
        raise ProviderError(status=response.status_code, body=body)
