"""Supported API providers."""

from enum import Enum


class Provider(str, Enum):
    """API wire formats the proxy knows how to route between.

    Adding a provider is a code change: the credential variable name and
    whether a credential is required at all are fixed per provider here.
    """

    OPENAI = "OPENAI"
    GEMINI = "GEMINI"
    OLLAMA = "OLLAMA"
    QWEN = "QWEN"

    @property
    def api_key_env_var(self) -> str:
        """Environment variable holding this provider's API key."""
        return f"{self.value}_API_KEY"

    @property
    def base_url_env_var(self) -> str:
        """Environment variable holding this provider's base URL."""
        return f"{self.value}_API_BASE_URL"

    @property
    def requires_api_key(self) -> bool:
        # Local Ollama servers run without authentication
        return self is not Provider.OLLAMA

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(member.value for member in cls)

    @classmethod
    def parse(cls, value: object) -> "Provider | None":
        """Return the provider named by value, or None if it is not one."""
        try:
            return cls(value)
        except ValueError:
            return None
