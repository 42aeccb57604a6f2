"""Configuration error types.

Mapping file problems are collected and reported together; environment
problems fail on the first error found. Both abort process startup.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from mapping_proxy.models.provider import Provider

CONFIG_ERROR_HEADER = "Invalid API mappings configuration:"


class ProxyConfigError(Exception):
    """Base class for all configuration failures."""


@dataclass(frozen=True)
class ConfigDefect:
    """One problem found in a mapping configuration document.

    ``index`` is the position of the offending mapping entry, or None when
    the problem is at the document root.
    """

    index: int | None
    message: str

    def __str__(self) -> str:
        if self.index is None:
            return f"{self.message} at root"
        return f"Invalid mapping at index {self.index}: {self.message}"


def format_defects(defects: Iterable[ConfigDefect]) -> str:
    """Render defects under the common header, one per line."""
    lines = [CONFIG_ERROR_HEADER]
    lines.extend(f"- {defect}" for defect in defects)
    return "\n".join(lines)


# Mapping file errors


class MappingConfigError(ProxyConfigError):
    """A mapping configuration file could not be turned into a table."""


class ConfigNotFoundError(MappingConfigError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Configuration file not found: {path}")


class ConfigPermissionError(MappingConfigError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Permission denied: Cannot access {path}")


class ConfigReadError(MappingConfigError):
    def __init__(self, path: Path, reason: Exception):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read configuration file: {path} - {reason}")


class EmptyConfigError(MappingConfigError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Configuration file is empty: {path}")


class ConfigParseError(MappingConfigError):
    def __init__(self, path: Path, reason: Exception):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid YAML format in {path}: {reason}")


class SchemaValidationError(MappingConfigError):
    """The document does not match the mapping schema."""

    def __init__(self, defects: Sequence[ConfigDefect]):
        self.defects = list(defects)
        super().__init__(format_defects(self.defects))


class MappingVerificationError(MappingConfigError):
    """Mappings are well formed but reference unusable transforms or credentials."""

    def __init__(self, defects: Sequence[ConfigDefect]):
        self.defects = list(defects)
        super().__init__(format_defects(self.defects))


class MappingLoadError(ProxyConfigError):
    """Envelope for any failure while loading the mapping table.

    The classified failure is available as ``error``.
    """

    def __init__(self, error: MappingConfigError):
        self.error = error
        super().__init__(f"Failed to load API mappings: {error}")


class UnknownTransformError(ProxyConfigError):
    def __init__(self, name: str, available: Iterable[str]):
        self.name = name
        super().__init__(
            f"Transform '{name}' is not registered. "
            f"Available transforms: {sorted(available)}"
        )


# Environment errors


class EnvironmentConfigError(ProxyConfigError):
    """The process environment does not describe a usable proxy."""


class MissingSelectorsError(EnvironmentConfigError):
    def __init__(self, source_var: str = "SOURCE_API", target_var: str = "TARGET_API"):
        super().__init__(
            f"{source_var} and {target_var} environment variables are required"
        )


class InvalidProviderError(EnvironmentConfigError):
    def __init__(self, variable: str, value: str):
        self.variable = variable
        self.value = value
        super().__init__(
            f"{variable} environment variable must be one of: "
            + ", ".join(Provider.values())
        )


class MissingCredentialError(EnvironmentConfigError):
    def __init__(self, provider: Provider, variable: str):
        self.provider = provider
        self.variable = variable
        super().__init__(
            f"{variable} environment variable is required for target API "
            f"{provider.value}"
        )


class MissingEndpointError(EnvironmentConfigError):
    def __init__(self, provider: Provider, variable: str):
        self.provider = provider
        self.variable = variable
        super().__init__(
            f"{variable} environment variable is required for target API "
            f"{provider.value}"
        )


class InvalidPortError(EnvironmentConfigError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(
            f"PORT environment variable must be an integer between 1 and 65535, "
            f"got '{value}'"
        )
