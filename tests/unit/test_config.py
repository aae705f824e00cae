"""Unit tests for Settings and the YAML settings loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from ragdocs.config.loader import load_settings
from ragdocs.config.settings import Settings
from ragdocs.utils.errors import InvalidConfigurationError


class TestEmbeddingConfig:
    def test_startup_config_uses_settings(self) -> None:
        settings = Settings(
            embedding_provider="openai",
            embedding_model="text-embedding-3-large",
            embedding_dimension=256,
            openai_api_key="sk-env",
        )
        config = settings.embedding_config()
        assert config.provider == "openai"
        assert config.model == "text-embedding-3-large"
        assert config.dimension == 256
        assert config.api_key == "sk-env"

    def test_override_provider_drops_configured_model(self) -> None:
        settings = Settings(embedding_provider="openai", embedding_model="text-embedding-3-large")
        config = settings.embedding_config(provider="ollama")
        assert config.provider == "ollama"
        assert config.model is None
        assert config.dimension == 0

    def test_missing_api_key_falls_back_to_settings(self) -> None:
        settings = Settings(openai_api_key="sk-env")
        assert settings.embedding_config(provider="openai").api_key == "sk-env"
        assert settings.embedding_config(provider="openai", api_key="sk-call").api_key == "sk-call"

    def test_empty_model_means_provider_default(self) -> None:
        assert Settings(embedding_model="").embedding_config().model is None


class TestLoadSettings:
    def test_yaml_values_apply(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("QDRANT_COLLECTION", raising=False)
        monkeypatch.delenv("CHUNK_SIZE", raising=False)
        config = tmp_path / "config.yaml"
        config.write_text("qdrant_collection: from_yaml\nchunk_size: 500\nunknown_key: 1\n")

        settings = load_settings(str(config))

        assert settings.qdrant_collection == "from_yaml"
        assert settings.chunk_size == 500

    def test_environment_wins_over_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("QDRANT_COLLECTION", "from_env")
        config = tmp_path / "config.yaml"
        config.write_text("qdrant_collection: from_yaml\n")

        assert load_settings(str(config)).qdrant_collection == "from_env"

    def test_missing_file_uses_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SEARCH_DEFAULT_LIMIT", raising=False)
        settings = load_settings(str(tmp_path / "absent.yaml"))
        assert settings.search_default_limit == 5

    def test_non_mapping_yaml_rejected(self, tmp_path: Path) -> None:
        config = tmp_path / "config.yaml"
        config.write_text("- just\n- a list\n")
        with pytest.raises(InvalidConfigurationError):
            load_settings(str(config))
