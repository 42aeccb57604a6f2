"""Tests for configuration models."""

import pytest
from pydantic import ValidationError

from mapping_proxy.models import (
    ApiMapping,
    MappingTable,
    Provider,
    ResolvedConfig,
    ResolvedEndpoint,
)


@pytest.fixture
def mapping() -> ApiMapping:
    """A sample OpenAI to Gemini mapping."""
    return ApiMapping(
        source_api="OPENAI",
        target_api="GEMINI",
        proxy_path_prefix="/v1/chat/completions",
        target_base_url_env_var="GEMINI_API_BASE_URL",
        target_api_key_env_var="GEMINI_API_KEY",
        request_transform="openaiToGeminiChat",
        response_transform="geminiToOpenAIChat",
    )


def test_provider_values():
    """Provider identities are stable strings."""
    assert Provider.values() == ("OPENAI", "GEMINI", "OLLAMA", "QWEN")
    assert Provider.GEMINI == "GEMINI"


def test_provider_parse():
    """Membership test without case folding."""
    assert Provider.parse("QWEN") is Provider.QWEN
    assert Provider.parse("qwen") is None
    assert Provider.parse("ANTHROPIC") is None
    assert Provider.parse(None) is None


def test_provider_env_var_names():
    """Each provider has fixed credential and base URL variables."""
    assert Provider.OPENAI.api_key_env_var == "OPENAI_API_KEY"
    assert Provider.OLLAMA.base_url_env_var == "OLLAMA_API_BASE_URL"


def test_only_ollama_is_credential_exempt():
    """Exactly one provider runs without a credential."""
    exempt = [p for p in Provider if not p.requires_api_key]
    assert exempt == [Provider.OLLAMA]


def test_mapping_fields(mapping):
    """Provider strings are parsed into enum members."""
    assert mapping.source_api is Provider.OPENAI
    assert mapping.target_api is Provider.GEMINI
    assert mapping.target_api_key_env_var == "GEMINI_API_KEY"


def test_mapping_api_key_env_var_defaults_to_none():
    """The credential variable is optional."""
    mapping = ApiMapping(
        source_api="OPENAI",
        target_api="OLLAMA",
        proxy_path_prefix="/ollama",
        target_base_url_env_var="OLLAMA_API_BASE_URL",
        request_transform="openaiToOllamaChat",
        response_transform="ollamaToOpenAIChat",
    )
    assert mapping.target_api_key_env_var is None


def test_mapping_is_frozen(mapping):
    """Mappings cannot be changed after loading."""
    with pytest.raises(ValidationError):
        mapping.proxy_path_prefix = "/other"


def test_table_sequence_behaviour(mapping):
    """Tables iterate, index and measure like their entries."""
    table = MappingTable(mappings=[mapping, mapping])

    assert len(table) == 2
    assert table[1] == mapping
    assert list(table) == [mapping, mapping]
    assert isinstance(table.mappings, tuple)


def test_table_equality_is_structural(mapping):
    """Two tables built from equal entries are equal."""
    copy = ApiMapping(**mapping.model_dump())
    assert MappingTable(mappings=[mapping]) == MappingTable(mappings=[copy])


def test_resolved_config_defaults():
    """Port defaults to 3000 and the key to None."""
    config = ResolvedConfig(source_api="OPENAI", target_api="OLLAMA")
    assert config.port == 3000
    assert config.target_api_key is None


def test_resolved_config_is_frozen():
    """Resolved settings are read-only."""
    config = ResolvedConfig(source_api="OPENAI", target_api="OLLAMA")
    with pytest.raises(ValidationError):
        config.port = 8080


def test_resolved_endpoint():
    """Endpoint holds a base URL and optional key."""
    endpoint = ResolvedEndpoint(base_url="http://localhost:11434")
    assert endpoint.api_key is None
