"""Credential resolution and environment-based provider configuration.

Two helpers for building strategy configuration outside of code:

* :func:`resolve_credential` -- reads a secret from a *source descriptor*
  (``env:VAR``, ``file:/path``, or a literal ``value:...``).
* :func:`load_provider_config` -- builds the pydantic config for a provider
  from ``<PREFIX>_<PROVIDER>_<FIELD>`` environment variables.

Both raise :class:`~oauthflow.exceptions.ConfigError` when a value cannot be
resolved. They run before any strategy is constructed, so they are not
subject to the strategies' no-raise result convention.

Example::

    # OAUTHFLOW_GITHUB_CLIENT_ID=... OAUTHFLOW_GITHUB_CLIENT_SECRET=...
    # OAUTHFLOW_GITHUB_REDIRECT_URI=https://example.com/cb
    config = load_provider_config("github")
    strategy = GithubStrategy(config)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from oauthflow.endpoints import Provider
from oauthflow.exceptions import ConfigError
from oauthflow.models import (
    ClientCredentials,
    GithubConfig,
    LinkedInConfig,
    TwitterConfig,
)

DEFAULT_ENV_PREFIX = "OAUTHFLOW"

CONFIG_MODELS: Mapping[Provider, type[ClientCredentials]] = {
    Provider.TWITTER: TwitterConfig,
    Provider.GITHUB: GithubConfig,
    Provider.LINKEDIN: LinkedInConfig,
}


_SOURCE_PREFIXES = ("env:", "file:", "value:")


def resolve_credential(source: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Resolve a credential from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``VAR_NAME`` from *environ*
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace
        - ``"value:literal"`` -- returns ``literal`` unchanged

    Args:
        source: The source descriptor string.
        environ: Mapping to read ``env:`` sources from instead of
            :data:`os.environ`.

    Returns:
        The resolved credential string.

    Raises:
        ConfigError: If the source can't be resolved.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        env = os.environ if environ is None else environ
        value = env.get(var_name)
        if value is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    if source.startswith("value:"):
        return source[6:]

    raise ConfigError(
        f"Unsupported credential source '{source}'. "
        "Use env:VAR, file:/path or value:literal"
    )


def _resolve_value(raw: str, environ: Mapping[str, str]) -> str:
    if raw.startswith(_SOURCE_PREFIXES):
        return resolve_credential(raw, environ)
    return raw


def load_provider_config(
    provider: Provider | str,
    env_prefix: str = DEFAULT_ENV_PREFIX,
    environ: Optional[Mapping[str, str]] = None,
) -> ClientCredentials:
    """Build a provider's credential config from environment variables.

    Each field ``name`` of the provider's config model is read from
    ``{env_prefix}_{PROVIDER}_{NAME}``, e.g. ``OAUTHFLOW_TWITTER_CONSUMER_KEY``.
    A value written as a source descriptor (``env:``, ``file:`` or ``value:``)
    is passed through :func:`resolve_credential`, so
    ``OAUTHFLOW_TWITTER_CONSUMER_SECRET=file:/run/secrets/tw`` reads the file.

    Args:
        provider: Provider tag (``"twitter"``, ``"github"``, ``"linkedin"``).
        env_prefix: Variable name prefix.
        environ: Mapping to read from instead of :data:`os.environ`.

    Returns:
        The populated :class:`~oauthflow.models.ClientCredentials` subclass.

    Raises:
        ConfigError: If the provider is unknown or a variable is unset,
            or a source descriptor cannot be resolved.
    """
    try:
        provider = Provider(provider)
    except ValueError:
        raise ConfigError(f"Unknown provider '{provider}'") from None

    env = os.environ if environ is None else environ
    model = CONFIG_MODELS[provider]
    values: dict[str, str] = {}
    missing: list[str] = []
    for field_name in model.model_fields:
        var_name = f"{env_prefix}_{provider.value}_{field_name}".upper()
        if var_name in env:
            values[field_name] = _resolve_value(env[var_name], env)
        else:
            missing.append(var_name)

    if missing:
        raise ConfigError(
            f"Missing environment variables for {provider.value}: {', '.join(missing)}"
        )
    return model(**values)
