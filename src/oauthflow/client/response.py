"""Response body parsing for provider token endpoints.

Providers answer in different encodings: Twitter sends form-encoded bodies
(labelled ``text/html``), GitHub sends JSON or XML depending on the
``Accept`` header, and LinkedIn sends JSON. :func:`parse_body` picks the
decoder from the content type and falls back to form decoding, then to the
raw text.
"""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import parse_qsl
from xml.etree import ElementTree

import httpx


def parse_form(text: str) -> dict[str, str]:
    """Decode a form-encoded body into a flat mapping.

    Raises:
        ValueError: If *text* is not form-encoded.
    """
    return dict(parse_qsl(text, keep_blank_values=True, strict_parsing=True))


def parse_xml(text: str) -> dict[str, str]:
    """Decode a flat XML document (``<OAuth><access_token>..</access_token></OAuth>``)."""
    root = ElementTree.fromstring(text)
    return {child.tag: (child.text or "") for child in root}


def parse_body(response: httpx.Response) -> Any:
    """Extract the body from *response*.

    Returns:
        A ``dict`` (or other JSON value) for JSON, XML and form-encoded
        bodies, the raw text when no decoder applies, or ``None`` for an
        empty body.
    """
    if not response.content:
        return None

    text = response.text
    content_type = response.headers.get("content-type", "").lower()

    if "json" in content_type:
        try:
            return response.json()
        except json.JSONDecodeError:
            return text

    if "xml" in content_type:
        try:
            return parse_xml(text)
        except ElementTree.ParseError:
            return text

    try:
        return parse_form(text)
    except ValueError:
        pass

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def extract_error_message(body: Any) -> Any:
    """Lift the first message of a structured error list into ``body["error"]``.

    Twitter reports failures as ``{"errors": [{"code": 32, "message": "..."}]}``.
    The rest of the body is kept. Bodies without such a list are returned
    unchanged.
    """
    if not isinstance(body, dict) or "error" in body:
        return body
    errors = body.get("errors")
    if isinstance(errors, list) and errors:
        first = errors[0]
        message = first.get("message") if isinstance(first, dict) else first
        if message:
            return {**body, "error": str(message)}
    return body
