"""Custom exception hierarchy for ragdocs.

All application exceptions inherit from :class:`RagDocsError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "openai", "ollama", "qdrant") caused the failure.

    RagDocsError  (base -- catch-all for any ragdocs error)
    +-- InvalidConfigurationError (bad or missing provider setup)
    +-- InvalidInputError         (missing or malformed caller argument)
    +-- EmbeddingError            (embedding provider call failed)
    +-- StoreUnavailableError     (vector store unreachable / operation failed)
    |   +-- CollectionMissingError (collection absent, e.g. mid-recreation)
    +-- PageFetchError            (page renderer could not fetch a URL)
    +-- DataCorruptionError       (stored payload fails shape validation)

Configuration and input errors are raised before any side effect.  The
tool layer turns fetch/embedding/store failures into error-flagged text
responses; ``DataCorruptionError`` is left to propagate.
"""


class RagDocsError(Exception):
    """Base exception for all ragdocs errors.

    The ``__str__`` method prefixes the provider name in brackets, e.g.
    ``[openai_embedding] API error: ...``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Caller / configuration errors
# ---------------------------------------------------------------------------

class InvalidConfigurationError(RagDocsError):
    """Raised when an embedding provider cannot be built from its configuration."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class InvalidInputError(RagDocsError):
    """Raised when a required tool argument is missing or has the wrong type."""

    def __init__(
        self,
        message: str = "Invalid input",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# External service errors
# ---------------------------------------------------------------------------

class EmbeddingError(RagDocsError):
    """Raised when an embedding provider call fails or returns a malformed vector."""

    def __init__(
        self,
        message: str = "Embedding generation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class StoreUnavailableError(RagDocsError):
    """Raised when the vector store is unreachable or a collection operation fails."""

    def __init__(
        self,
        message: str = "Vector store is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class CollectionMissingError(StoreUnavailableError):
    """Raised when the target collection does not exist.

    Seen by operations that race a collection recreation: between the
    delete and the create the collection is absent.
    """

    def __init__(
        self,
        message: str = "Collection does not exist",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class PageFetchError(RagDocsError):
    """Raised when the page renderer cannot fetch or parse a URL."""

    def __init__(
        self,
        message: str = "Failed to fetch page",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Data integrity errors
# ---------------------------------------------------------------------------

class DataCorruptionError(RagDocsError):
    """Raised when a payload read back from the vector store is not a document chunk."""

    def __init__(
        self,
        message: str = "Stored payload failed validation",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
