"""Greedy word-boundary text chunking.

Text is split on whitespace into words, and words are packed into a chunk
until the chunk's joined length (single spaces) *reaches* the size limit.
The limit is a soft threshold checked only after a word is appended, so a
chunk may overrun it by up to one word, and a single word longer than the
limit becomes its own chunk unsplit.  Chunks never overlap.
"""

from __future__ import annotations

import structlog

logger = structlog.get_logger(logger_name=__name__)

DEFAULT_CHUNK_SIZE = 1000


class TextChunker:
    """Splits text into ordered chunks of roughly ``max_chunk_size`` characters.

    Parameters
    ----------
    max_chunk_size:
        Character length at which a chunk is closed (default 1000).
    """

    def __init__(self, max_chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if max_chunk_size <= 0:
            raise ValueError("max_chunk_size must be > 0")
        self._max_chunk_size = max_chunk_size

    @property
    def max_chunk_size(self) -> int:
        return self._max_chunk_size

    def chunk(self, text: str) -> list[str]:
        """Split *text* into chunks.  Empty or whitespace-only input gives ``[]``."""
        chunks: list[str] = []
        current: list[str] = []
        # Length of " ".join(current), tracked incrementally.
        current_length = 0

        for word in text.split():
            current_length += len(word) + (1 if current else 0)
            current.append(word)
            if current_length >= self._max_chunk_size:
                chunks.append(" ".join(current))
                current = []
                current_length = 0

        if current:
            chunks.append(" ".join(current))

        logger.debug("chunking_complete", num_chunks=len(chunks), max_chunk_size=self._max_chunk_size)
        return chunks
