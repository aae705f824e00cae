"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# Values are read from, in priority order:
#
#   1. **Environment variables** -- e.g. OPENAI_API_KEY=sk-abc123
#   2. **.env file** -- key=value lines in the project root .env file
#   3. **config/config.yaml** -- only when loaded via load_settings()
#
# Field `embedding_provider` maps to env var `EMBEDDING_PROVIDER`, and so
# on: pydantic-settings upper-cases and matches automatically.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from ragdocs.models.embedding import EmbeddingConfig


class Settings(BaseSettings):
    """ragdocs application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Embeddings ===
    # "ollama"/"local" or "openai"/"hosted".  Overridable per call through
    # the configure_and_test_embeddings tool.
    embedding_provider: str = "ollama"
    embedding_model: str = ""  # Empty = nomic-embed-text / text-embedding-3-small
    embedding_dimension: int = 0  # 0 = use the model's known dimension
    openai_api_key: str = ""
    openai_base_url: str = ""  # OpenAI-compatible hosts (TogetherAI, etc.)
    ollama_base_url: str = "http://localhost:11434"

    # === Vector store ===
    qdrant_url: str = "http://127.0.0.1:6333"
    qdrant_api_key: str = ""
    qdrant_collection: str = "documentation"

    # === Retrieval pipeline ===
    chunk_size: int = 1000
    search_default_limit: int = 5
    scroll_page_size: int = 256
    fetch_timeout: float = 30.0

    # === App Config ===
    app_host: str = "127.0.0.1"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"

    def embedding_config(
        self,
        provider: str | None = None,
        model: str | None = None,
        api_key: str | None = None,
    ) -> EmbeddingConfig:
        """Build an :class:`EmbeddingConfig`, filling gaps from these settings.

        A missing *api_key* falls back to ``openai_api_key``.  The configured
        model and dimension only apply when *provider* is left unset, since a
        model id belongs to one provider family.
        """
        use_defaults = provider is None
        return EmbeddingConfig(
            provider=provider if provider is not None else self.embedding_provider,
            model=model or (self.embedding_model if use_defaults else None) or None,
            api_key=api_key or self.openai_api_key or None,
            dimension=self.embedding_dimension if use_defaults and not model else 0,
            ollama_base_url=self.ollama_base_url,
            openai_base_url=self.openai_base_url,
        )
