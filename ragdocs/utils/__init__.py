"""Utility modules for ragdocs.

- **errors** -- Domain exception hierarchy rooted at RagDocsError; each
  collaborator raises its own subclass so the tool layer can decide which
  failures become error text and which propagate.
- **logging** -- structlog setup with a dual-renderer pattern: console
  output in development, structured JSON in production, always on stderr.
"""

# -- Domain exception hierarchy --------------------------------------------
from ragdocs.utils.errors import (
    CollectionMissingError,
    DataCorruptionError,
    EmbeddingError,
    InvalidConfigurationError,
    InvalidInputError,
    PageFetchError,
    RagDocsError,
    StoreUnavailableError,
)

# -- Structured logging setup ----------------------------------------------
from ragdocs.utils.logging import configure_logging, get_logger

__all__ = [
    "CollectionMissingError",
    "DataCorruptionError",
    "EmbeddingError",
    "InvalidConfigurationError",
    "InvalidInputError",
    "PageFetchError",
    "RagDocsError",
    "StoreUnavailableError",
    "configure_logging",
    "get_logger",
]
