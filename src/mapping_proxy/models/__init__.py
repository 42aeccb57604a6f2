"""Pydantic models for the mapping proxy."""

from mapping_proxy.models.config import DEFAULT_PORT, ResolvedConfig, ResolvedEndpoint
from mapping_proxy.models.mapping import ApiMapping, MappingTable
from mapping_proxy.models.provider import Provider

__all__ = [
    "ApiMapping",
    "DEFAULT_PORT",
    "MappingTable",
    "Provider",
    "ResolvedConfig",
    "ResolvedEndpoint",
]
