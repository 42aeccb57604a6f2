"""Mapping table models.

A mapping describes one supported transformation path: requests arriving in
``source_api`` format under ``proxy_path_prefix`` are converted by
``request_transform`` and sent to ``target_api``; the response travels back
through ``response_transform``.
"""

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from mapping_proxy.models.provider import Provider


class ApiMapping(BaseModel):
    """A single source-to-target API mapping."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    source_api: Provider
    target_api: Provider
    proxy_path_prefix: StrictStr = Field(min_length=1)
    target_base_url_env_var: StrictStr = Field(min_length=1)
    target_api_key_env_var: StrictStr | None = None
    request_transform: StrictStr = Field(min_length=1)
    response_transform: StrictStr = Field(min_length=1)


class MappingTable(BaseModel):
    """Ordered, immutable collection of mappings.

    Order is preserved from the configuration document. Reloading builds a
    new table; a table is never modified in place.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    mappings: tuple[ApiMapping, ...]

    def __iter__(self) -> Iterator[ApiMapping]:  # type: ignore[override]
        return iter(self.mappings)

    def __len__(self) -> int:
        return len(self.mappings)

    def __getitem__(self, index: int) -> ApiMapping:
        return self.mappings[index]
