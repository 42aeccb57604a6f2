"""Loading of the API mapping configuration file."""

import logging
import threading
from collections import Counter
from collections.abc import Hashable
from pathlib import Path
from typing import Any

import yaml

from mapping_proxy.errors import (
    ConfigNotFoundError,
    ConfigParseError,
    ConfigPermissionError,
    ConfigReadError,
    EmptyConfigError,
    MappingConfigError,
    MappingLoadError,
)
from mapping_proxy.models.mapping import MappingTable
from mapping_proxy.transforms import TransformRegistry, verify_mapping_table
from mapping_proxy.validation import validate_mappings

logger = logging.getLogger(__name__)

DEFAULT_MAPPINGS_PATH = Path(__file__).parent / "api-mappings.yaml"


class UniqueKeyLoader(yaml.SafeLoader):
    """Safe loader that rejects mappings with repeated keys."""

    def construct_mapping(self, node, deep=False):
        seen = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            if not isinstance(key, Hashable):
                continue
            if key in seen:
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    f"found duplicate key '{key}'",
                    key_node.start_mark,
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


def read_config_text(path: Path) -> str:
    """Read the configuration file, classifying I/O failures."""
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError as exc:
        raise ConfigNotFoundError(path) from exc
    except PermissionError as exc:
        raise ConfigPermissionError(path) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigReadError(path, exc) from exc


def parse_config_text(text: str, path: Path) -> Any:
    """Parse YAML configuration text into plain Python data."""
    if not text.strip():
        raise EmptyConfigError(path)

    try:
        return yaml.load(text, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise ConfigParseError(path, exc) from exc


def _warn_on_shared_prefixes(table: MappingTable) -> None:
    counts = Counter(mapping.proxy_path_prefix for mapping in table)
    for prefix, count in counts.items():
        if count > 1:
            logger.warning(
                "%d mappings share proxy_path_prefix '%s'; the first one wins",
                count,
                prefix,
            )


def load_api_mappings(config_path: Path | str | None = None) -> MappingTable:
    """Load and validate the API mapping table.

    Args:
        config_path: Path to the YAML mapping file. Defaults to the
            ``api-mappings.yaml`` shipped with the package.

    Returns:
        The validated mapping table, in file order.

    Raises:
        MappingLoadError: Wrapping the specific failure, available as ``.error``.
    """
    path = Path(config_path) if config_path is not None else DEFAULT_MAPPINGS_PATH

    try:
        text = read_config_text(path)
        document = parse_config_text(text, path)
        table = validate_mappings(document)
    except MappingConfigError as exc:
        logger.error("Error loading API mappings from %s: %s", path, exc)
        raise MappingLoadError(exc) from exc

    _warn_on_shared_prefixes(table)
    logger.info("Loaded %d API mappings from %s", len(table), path)
    return table


def load_verified_mappings(
    config_path: Path | str | None = None,
    registry: TransformRegistry | None = None,
) -> MappingTable:
    """Load the mapping table and check that every mapping can be served.

    Credential variables are always checked; transform names only when a
    registry is given.

    Raises:
        MappingLoadError: For load and verification failures alike.
    """
    path = Path(config_path) if config_path is not None else DEFAULT_MAPPINGS_PATH
    table = load_api_mappings(path)
    try:
        verify_mapping_table(table, registry)
    except MappingConfigError as exc:
        logger.error("Rejected API mappings from %s: %s", path, exc)
        raise MappingLoadError(exc) from exc
    return table


class MappingStore:
    """Holds the active mapping table and swaps it on reload.

    A new table is loaded and verified before it replaces the current one,
    so readers only ever see a complete, valid table.
    """

    def __init__(
        self,
        config_path: Path | str | None = None,
        registry: TransformRegistry | None = None,
    ):
        self.config_path = (
            Path(config_path) if config_path is not None else DEFAULT_MAPPINGS_PATH
        )
        self.registry = registry
        self._table: MappingTable | None = None
        self._reload_lock = threading.Lock()

    @property
    def table(self) -> MappingTable:
        if self._table is None:
            raise RuntimeError("Mapping table has not been loaded")
        return self._table

    def reload(self) -> MappingTable:
        """Load a fresh table and make it current.

        On failure the previous table stays active and the error propagates.
        """
        with self._reload_lock:
            table = load_verified_mappings(self.config_path, self.registry)
            self._table = table
        return table
