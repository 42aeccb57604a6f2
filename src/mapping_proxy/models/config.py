"""Resolved runtime configuration models."""

from pydantic import BaseModel, ConfigDict

from mapping_proxy.models.provider import Provider

DEFAULT_PORT = 3000


class ResolvedConfig(BaseModel):
    """Process settings resolved from the environment at startup."""

    model_config = ConfigDict(frozen=True)

    source_api: Provider
    target_api: Provider
    port: int = DEFAULT_PORT
    target_api_key: str | None = None


class ResolvedEndpoint(BaseModel):
    """Outbound base URL and credential for one mapping."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    api_key: str | None = None
