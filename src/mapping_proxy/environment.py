"""Resolution of proxy settings from environment variables."""

import logging
import os
from collections.abc import Mapping

from mapping_proxy.errors import (
    InvalidPortError,
    InvalidProviderError,
    MissingCredentialError,
    MissingEndpointError,
    MissingSelectorsError,
)
from mapping_proxy.models.config import DEFAULT_PORT, ResolvedConfig, ResolvedEndpoint
from mapping_proxy.models.mapping import ApiMapping
from mapping_proxy.models.provider import Provider

logger = logging.getLogger(__name__)

SOURCE_API_VAR = "SOURCE_API"
TARGET_API_VAR = "TARGET_API"
PORT_VAR = "PORT"

MAX_PORT = 65535


def _select_provider(environ: Mapping[str, str], variable: str) -> Provider:
    value = environ[variable]
    provider = Provider.parse(value)
    if provider is None:
        raise InvalidProviderError(variable, value)
    return provider


def resolve_port(environ: Mapping[str, str]) -> int:
    """Read PORT, defaulting to 3000 when unset or empty."""
    raw = environ.get(PORT_VAR)
    if not raw:
        return DEFAULT_PORT

    value = raw.strip()
    if not value.isdecimal():
        raise InvalidPortError(raw)

    port = int(value)
    if not 1 <= port <= MAX_PORT:
        raise InvalidPortError(raw)
    return port


def resolve_environment(environ: Mapping[str, str] | None = None) -> ResolvedConfig:
    """Resolve source/target providers, credential and port.

    Fails on the first problem found. Empty variables count as unset.

    Args:
        environ: Environment to read. Defaults to ``os.environ``.

    Raises:
        EnvironmentConfigError: Describing the first problem found.
    """
    env = os.environ if environ is None else environ

    if not env.get(SOURCE_API_VAR) or not env.get(TARGET_API_VAR):
        raise MissingSelectorsError(SOURCE_API_VAR, TARGET_API_VAR)

    source_api = _select_provider(env, SOURCE_API_VAR)
    target_api = _select_provider(env, TARGET_API_VAR)

    target_api_key = env.get(target_api.api_key_env_var) or None
    if target_api_key is None and target_api.requires_api_key:
        raise MissingCredentialError(target_api, target_api.api_key_env_var)

    config = ResolvedConfig(
        source_api=source_api,
        target_api=target_api,
        port=resolve_port(env),
        target_api_key=target_api_key,
    )
    logger.debug(
        "Resolved %s -> %s on port %d", source_api.value, target_api.value, config.port
    )
    return config


def resolve_target_endpoint(
    mapping: ApiMapping, environ: Mapping[str, str] | None = None
) -> ResolvedEndpoint:
    """Look up the outbound base URL and credential named by a mapping.

    Raises:
        MissingEndpointError: If the base URL variable is unset.
        MissingCredentialError: If the target needs a credential and none is set.
    """
    env = os.environ if environ is None else environ
    target_api = mapping.target_api

    base_url = env.get(mapping.target_base_url_env_var)
    if not base_url:
        raise MissingEndpointError(target_api, mapping.target_base_url_env_var)

    key_var = mapping.target_api_key_env_var
    api_key = (env.get(key_var) or None) if key_var else None
    if api_key is None and target_api.requires_api_key:
        raise MissingCredentialError(target_api, key_var or target_api.api_key_env_var)

    return ResolvedEndpoint(base_url=base_url, api_key=api_key)
