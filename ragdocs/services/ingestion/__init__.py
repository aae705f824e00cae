"""
Ingestion -- page rendering, chunking, embedding and storage.

Converts a documentation URL into embedded chunks stored in the vector
store collection.
"""

from ragdocs.services.ingestion.chunker import TextChunker
from ragdocs.services.ingestion.ingestion_service import IngestionService

__all__ = ["IngestionService", "TextChunker"]
