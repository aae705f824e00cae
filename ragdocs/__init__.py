"""ragdocs -- documentation retrieval over a Qdrant vector store.

Ingests web documentation pages, embeds their chunks with a local (Ollama)
or hosted (OpenAI) model, and serves semantic search over MCP, HTTP and a
CLI.
"""

__version__ = "0.1.0"
