"""Mapping configuration and environment resolution for a multi-provider LLM proxy."""

from mapping_proxy.config import MappingStore, load_api_mappings, load_verified_mappings
from mapping_proxy.environment import resolve_environment, resolve_target_endpoint
from mapping_proxy.errors import MappingLoadError, ProxyConfigError
from mapping_proxy.models import ApiMapping, MappingTable, Provider, ResolvedConfig
from mapping_proxy.transforms import TransformRegistry, verify_mapping_table

__all__ = [
    "ApiMapping",
    "MappingLoadError",
    "MappingStore",
    "MappingTable",
    "Provider",
    "ProxyConfigError",
    "ResolvedConfig",
    "TransformRegistry",
    "load_api_mappings",
    "load_verified_mappings",
    "resolve_environment",
    "resolve_target_endpoint",
    "verify_mapping_table",
]
