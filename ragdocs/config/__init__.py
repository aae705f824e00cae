"""Configuration module -- exports Settings and load_settings."""

from ragdocs.config.loader import load_settings
from ragdocs.config.settings import Settings

__all__ = ["Settings", "load_settings"]
