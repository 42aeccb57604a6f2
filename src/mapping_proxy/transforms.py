"""Registry of named request/response transforms.

Mappings refer to transforms by name. The registry is populated at startup
and the mapping table is checked against it before any traffic is served,
so a misspelled transform name fails the load instead of a request.
"""

import logging
from collections.abc import Callable, Iterator
from typing import Any

from mapping_proxy.errors import (
    ConfigDefect,
    MappingVerificationError,
    UnknownTransformError,
)
from mapping_proxy.models.mapping import MappingTable

logger = logging.getLogger(__name__)

Transform = Callable[[dict[str, Any]], dict[str, Any]]


class TransformRegistry:
    """Maps logical transform names to callables."""

    def __init__(self) -> None:
        self._transforms: dict[str, Transform] = {}

    def add(self, name: str, func: Transform) -> None:
        if name in self._transforms:
            raise ValueError(f"Transform '{name}' is already registered")
        self._transforms[name] = func

    def register(self, name: str) -> Callable[[Transform], Transform]:
        """Decorator form of :meth:`add`."""

        def decorator(func: Transform) -> Transform:
            self.add(name, func)
            return func

        return decorator

    def get(self, name: str) -> Transform:
        try:
            return self._transforms[name]
        except KeyError:
            raise UnknownTransformError(name, self._transforms) from None

    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self._transforms))

    def __contains__(self, name: object) -> bool:
        return name in self._transforms

    def __len__(self) -> int:
        return len(self._transforms)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())


def check_credential_vars(table: MappingTable) -> list[ConfigDefect]:
    """Find mappings whose target needs a credential but names no variable for it."""
    defects = []
    for index, mapping in enumerate(table):
        if mapping.target_api_key_env_var is None and mapping.target_api.requires_api_key:
            defects.append(
                ConfigDefect(
                    index,
                    "target_api_key_env_var is required for target API "
                    f"{mapping.target_api.value}",
                )
            )
    return defects


def check_transform_names(
    table: MappingTable, registry: TransformRegistry
) -> list[ConfigDefect]:
    """Find transform names that are not registered."""
    defects = []
    for index, mapping in enumerate(table):
        for field in ("request_transform", "response_transform"):
            name = getattr(mapping, field)
            if name not in registry:
                defects.append(
                    ConfigDefect(index, f"{field} '{name}' is not a registered transform")
                )
    return defects


def verify_mapping_table(
    table: MappingTable, registry: TransformRegistry | None = None
) -> None:
    """Check that every mapping can actually be served.

    A mapping whose target provider needs a credential must name the variable
    that holds it. When a registry is given, each transform name must also be
    registered.

    Raises:
        MappingVerificationError: With every problem found across the table.
    """
    defects = check_credential_vars(table)
    if registry is not None:
        defects.extend(check_transform_names(table, registry))

    if defects:
        defects.sort(key=lambda defect: defect.index)
        raise MappingVerificationError(defects)

    logger.debug("Verified %d mappings", len(table))
