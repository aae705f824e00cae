"""Embedding provider configuration models.

An :class:`EmbeddingConfig` is built at startup from :class:`Settings` or per
call by the ``configure_and_test_embeddings`` tool.  It is never persisted.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ragdocs.utils.errors import InvalidConfigurationError


class ProviderKind(str, Enum):
    """The two embedding backend families."""

    LOCAL = "local"
    HOSTED = "hosted"

    @classmethod
    def parse(cls, value: str) -> ProviderKind:
        """Map a provider name (``local``/``ollama``, ``hosted``/``openai``) to a kind.

        Raises
        ------
        InvalidConfigurationError
            If *value* names no known provider.
        """
        normalized = (value or "").strip().lower()
        kind = _PROVIDER_ALIASES.get(normalized)
        if kind is None:
            raise InvalidConfigurationError(f"Unknown embedding provider: {value}")
        return kind

    @property
    def label(self) -> str:
        """Backend name shown to callers (``ollama`` or ``openai``)."""
        return "ollama" if self is ProviderKind.LOCAL else "openai"


_PROVIDER_ALIASES: dict[str, ProviderKind] = {
    "local": ProviderKind.LOCAL,
    "ollama": ProviderKind.LOCAL,
    "hosted": ProviderKind.HOSTED,
    "openai": ProviderKind.HOSTED,
}


class EmbeddingConfig(BaseModel):
    """Everything needed to construct one embedding provider."""

    model_config = ConfigDict(frozen=True)

    provider: str = Field(default="ollama", description="Provider kind or alias.")
    model: str | None = Field(default=None, description="Model id; None = provider default.")
    api_key: str | None = Field(default=None, description="Credential (hosted only).")
    dimension: int = Field(
        default=0,
        ge=0,
        description="Declared vector size; 0 = look up the model's known size.",
    )
    ollama_base_url: str = "http://localhost:11434"
    openai_base_url: str = ""
