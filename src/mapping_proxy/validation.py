"""Schema validation for parsed mapping documents.

Validation never stops at the first problem: every defect in the document is
collected so an operator can fix them all in one pass.
"""

from typing import Any

from pydantic import ValidationError

from mapping_proxy.errors import ConfigDefect, SchemaValidationError
from mapping_proxy.models.mapping import MappingTable
from mapping_proxy.models.provider import Provider

# Pydantic error types mapped to JSON schema type names
TYPE_ERRORS = {
    "string_type": "a string",
    "list_type": "an array",
    "tuple_type": "an array",
    "dict_type": "an object",
    "model_type": "an object",
    "model_attributes_type": "an object",
}


def _locate(loc: tuple[int | str, ...]) -> tuple[int | None, str]:
    """Split a pydantic error location into (entry index, field name)."""
    if len(loc) >= 2 and loc[0] == "mappings" and isinstance(loc[1], int):
        rest = loc[2:]
        return loc[1], str(rest[-1]) if rest else "mapping"
    return None, str(loc[-1]) if loc else "configuration"


def _describe(error: dict[str, Any], field: str) -> str:
    kind = error["type"]
    if kind == "missing":
        return f"missing {field}"
    if kind == "extra_forbidden":
        return f"unknown property '{field}'"
    if kind == "string_too_short":
        return f"{field} must not be empty"
    if kind == "enum":
        if isinstance(error["input"], str):
            return f"{field} must be one of: {', '.join(Provider.values())}"
        return f"{field} must be a string"
    if kind in TYPE_ERRORS:
        return f"{field} must be {TYPE_ERRORS[kind]}"
    return f"{field} {error['msg'].lower()}"


def _key_position(container: Any, key: int | str) -> int:
    # Keys not present in the document (missing fields) sort last
    if isinstance(container, dict):
        keys = list(container)
        return keys.index(key) if key in keys else len(keys)
    return 0


def _document_order(document: Any, loc: tuple[int | str, ...]) -> tuple[int, int, int]:
    """Sort key placing a defect where its key appears in the document."""
    if not loc:
        return (0, -1, 0)

    root_position = _key_position(document, loc[0])
    index, _ = _locate(loc)
    if index is None:
        return (root_position, -1, 0)

    entries = document.get("mappings") if isinstance(document, dict) else None
    entry = entries[index] if isinstance(entries, (list, tuple)) else None
    field_position = _key_position(entry, loc[2]) if len(loc) > 2 else -1
    return (root_position, index, field_position)


def to_defects(exc: ValidationError, document: Any = None) -> list[ConfigDefect]:
    """Convert a pydantic validation error into configuration defects.

    Defects are listed in the order their keys appear in ``document``;
    missing fields follow the keys that are present, in schema order.
    """
    errors = sorted(
        exc.errors(include_url=False),
        key=lambda error: _document_order(document, error["loc"]),
    )
    defects = []
    for error in errors:
        index, field = _locate(error["loc"])
        defects.append(ConfigDefect(index=index, message=_describe(error, field)))
    return defects


def collect_schema_errors(document: Any) -> list[ConfigDefect]:
    """Return every schema defect in a parsed document; empty means valid."""
    try:
        MappingTable.model_validate(document)
    except ValidationError as exc:
        return to_defects(exc, document)
    return []


def validate_mappings(document: Any) -> MappingTable:
    """Validate a parsed document and build the mapping table.

    Raises:
        SchemaValidationError: With all defects found in the document.
    """
    try:
        return MappingTable.model_validate(document)
    except ValidationError as exc:
        raise SchemaValidationError(to_defects(exc, document)) from exc
