"""HTTP collaborator for provider endpoints.

- :class:`AsyncHttpClient` -- single-attempt form POSTs with error mapping.
- :func:`parse_body` -- content-type aware body decoding.
"""

from oauthflow.client.async_client import AsyncHttpClient
from oauthflow.client.response import extract_error_message, parse_body

__all__ = ["AsyncHttpClient", "extract_error_message", "parse_body"]
