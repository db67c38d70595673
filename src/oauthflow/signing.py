"""OAuth1 HMAC-SHA1 request signing (:rfc:`5849` section 3.4).

The module is split into pure helpers and one small class:

- :func:`percent_encode`, :func:`normalize_url`, :func:`normalize_parameters`,
  :func:`build_base_string`, :func:`build_signing_key`,
  :func:`hmac_sha1_signature` and :func:`build_authorization_header` are
  deterministic functions with no I/O.
- :class:`OAuth1Signer` binds a consumer key/secret and takes its clock and
  nonce source as injectable callables, so a signer built with fixed
  sources always produces the same signature.

Example::

    signer = OAuth1Signer("key", "secret")
    signed = signer.sign("POST", "https://api.twitter.com/oauth/request_token",
                         {"oauth_callback": "https://example.com/cb"})
    signed.headers["Authorization"]  # 'OAuth oauth_consumer_key="key", ...'
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
import time
from typing import Callable, Iterable, Mapping, Optional, Union
from urllib.parse import parse_qsl, quote, urlsplit, urlunsplit

from oauthflow.models import SignedRequest

SIGNATURE_METHOD = "HMAC-SHA1"
OAUTH_VERSION = "1.0"

_DEFAULT_PORTS = {"http": 80, "https": 443}

Params = Union[Mapping[str, str], Iterable[tuple[str, str]]]


def generate_nonce() -> str:
    """Return a cryptographically random, alphanumeric nonce (32 hex chars)."""
    return secrets.token_hex(16)


def percent_encode(value: object) -> str:
    """Percent-encode *value* per :rfc:`5849` section 3.6.

    Only the unreserved characters ``A-Z a-z 0-9 - . _ ~`` are left as-is.
    """
    return quote(str(value), safe="~")


def _pairs(params: Optional[Params]) -> list[tuple[str, str]]:
    if params is None:
        return []
    if isinstance(params, Mapping):
        return [(str(k), str(v)) for k, v in params.items()]
    return [(str(k), str(v)) for k, v in params]


def normalize_url(url: str) -> tuple[str, list[tuple[str, str]]]:
    """Split *url* into its base string URI and its query parameters.

    Scheme and host are lower-cased, default ports are dropped, and the
    query and fragment are removed from the URI. The query parameters are
    returned separately because they take part in the signature.

    Args:
        url: Absolute request URL.

    Returns:
        A tuple ``(base_uri, query_pairs)``.
    """
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    netloc = host if port is None or _DEFAULT_PORTS.get(scheme) == port else f"{host}:{port}"
    path = parts.path or "/"
    query = parse_qsl(parts.query, keep_blank_values=True)
    return urlunsplit((scheme, netloc, path, "", "")), query


def normalize_parameters(params: Iterable[tuple[str, str]]) -> str:
    """Encode, sort and concatenate request parameters.

    Pairs are percent-encoded first and then sorted by name, with ties
    broken by value, and joined as ``name=value`` with ``&``.
    """
    encoded = sorted((percent_encode(k), percent_encode(v)) for k, v in params)
    return "&".join(f"{k}={v}" for k, v in encoded)


def build_base_string(method: str, url: str, params: Iterable[tuple[str, str]]) -> str:
    """Build the signature base string.

    Args:
        method: HTTP method; upper-cased.
        url: Request URL. Any query parameters it carries are merged into
            *params*.
        params: Body parameters plus the ``oauth_*`` protocol parameters
            (without ``oauth_signature``).

    Returns:
        ``METHOD&encoded-uri&encoded-normalized-parameters``.
    """
    base_uri, query = normalize_url(url)
    normalized = normalize_parameters([*query, *params])
    return "&".join(
        [method.upper(), percent_encode(base_uri), percent_encode(normalized)]
    )


def build_signing_key(consumer_secret: str, token_secret: str = "") -> str:
    """Return ``encode(consumer_secret) & encode(token_secret)``."""
    return f"{percent_encode(consumer_secret)}&{percent_encode(token_secret)}"


def hmac_sha1_signature(signing_key: str, base_string: str) -> str:
    """Return the base64-encoded HMAC-SHA1 of *base_string* under *signing_key*."""
    digest = hmac.new(
        signing_key.encode("utf-8"), base_string.encode("utf-8"), hashlib.sha1
    ).digest()
    return base64.b64encode(digest).decode("ascii")


def build_authorization_header(oauth_params: Mapping[str, str]) -> str:
    """Render ``oauth_*`` parameters as an ``Authorization`` header value."""
    fields = ", ".join(
        f'{percent_encode(k)}="{percent_encode(v)}"' for k, v in sorted(oauth_params.items())
    )
    return f"OAuth {fields}"


class OAuth1Signer:
    """Signs outbound requests for one OAuth1 consumer.

    Every call to :meth:`sign` draws a fresh nonce and timestamp, so signed
    requests are single-use.

    Args:
        consumer_key: Application consumer key.
        consumer_secret: Application consumer secret.
        clock: Returns the current Unix time. Defaults to :func:`time.time`.
        nonce_factory: Returns a fresh nonce. Defaults to
            :func:`generate_nonce`.
    """

    def __init__(
        self,
        consumer_key: str,
        consumer_secret: str,
        clock: Callable[[], float] = time.time,
        nonce_factory: Callable[[], str] = generate_nonce,
    ) -> None:
        self._consumer_key = consumer_key
        self._consumer_secret = consumer_secret
        self._clock = clock
        self._nonce_factory = nonce_factory

    def oauth_parameters(self, token: Optional[str] = None) -> dict[str, str]:
        """Return the protocol parameters for one request, without the signature."""
        oauth_params = {
            "oauth_consumer_key": self._consumer_key,
            "oauth_nonce": self._nonce_factory(),
            "oauth_signature_method": SIGNATURE_METHOD,
            "oauth_timestamp": str(int(self._clock())),
            "oauth_version": OAUTH_VERSION,
        }
        if token:
            oauth_params["oauth_token"] = token
        return oauth_params

    def signature(
        self,
        method: str,
        url: str,
        params: Iterable[tuple[str, str]],
        token_secret: str = "",
    ) -> str:
        """Compute the signature over *params*, which must include the ``oauth_*`` fields."""
        base_string = build_base_string(method, url, params)
        return hmac_sha1_signature(
            build_signing_key(self._consumer_secret, token_secret), base_string
        )

    def sign(
        self,
        method: str,
        url: str,
        params: Optional[Params] = None,
        token: Optional[str] = None,
        token_secret: str = "",
    ) -> SignedRequest:
        """Sign a request and return it with its ``Authorization`` header.

        Args:
            method: HTTP method.
            url: Request URL (query parameters are signed too).
            params: Form body parameters sent with the request.
            token: Optional token the request is made on behalf of.
            token_secret: Secret belonging to *token*, empty if none.

        Returns:
            A :class:`~oauthflow.models.SignedRequest`.
        """
        oauth_params = self.oauth_parameters(token)
        oauth_params["oauth_signature"] = self.signature(
            method, url, [*_pairs(params), *oauth_params.items()], token_secret
        )
        return SignedRequest(
            url=url,
            method=method.upper(),
            headers={"Authorization": build_authorization_header(oauth_params)},
        )
