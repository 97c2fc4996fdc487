"""Documentation search MCP server with an in-memory BM25 index."""

__version__ = "0.1.0"
