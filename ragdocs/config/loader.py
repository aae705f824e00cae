"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ──────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. config/config.yaml  -- Static defaults checked into the repo
#   2. .env file           -- Local developer overrides (not committed)
#   3. Environment vars    -- Set by the MCP client / deployment
#
# The YAML file is flat: each key is a Settings field name, e.g.
#
#   embedding_provider: openai
#   qdrant_collection: documentation
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path

import yaml

from ragdocs.config.settings import Settings
from ragdocs.utils.errors import InvalidConfigurationError


def load_settings(path: str = "config/config.yaml") -> Settings:
    """Load YAML defaults and layer environment-based Settings on top.

    Args:
        path: Path to the YAML configuration file.  A missing file is fine.

    Returns:
        Fully resolved :class:`Settings`.

    Raises:
        InvalidConfigurationError: If the file is not a YAML mapping.
    """
    config_path = Path(path)
    yaml_config: dict = {}
    if config_path.exists():
        with open(config_path) as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise InvalidConfigurationError(f"{path} must contain a mapping of settings")
        yaml_config = loaded

    # Only fields that the environment / .env actually set are allowed to
    # override the YAML layer; everything else keeps its YAML value.
    env_settings = Settings()
    env_overrides = env_settings.model_dump(include=env_settings.model_fields_set)

    known = {key: value for key, value in yaml_config.items() if key in Settings.model_fields}
    return Settings(**{**known, **env_overrides})
