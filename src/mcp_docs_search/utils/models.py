"""Centralized Pydantic models for type-safe MCP tool responses and fetched pages."""

from __future__ import annotations

from pydantic import BaseModel, Field


# ============================================================================
# Fetched pages
# ============================================================================


class DocPage(BaseModel):
    """A fetched and cleaned documentation page.

    ``content`` is Markdown for Markdown sources and line-oriented plain text
    for HTML sources.
    """

    url: str = Field(description="Validated absolute page URL")
    title: str = Field(description="Page title (curated, extracted or derived from the URL)")
    content: str = Field(default="", description="Cleaned page content")


# ============================================================================
# MCP Tool Response Models (Pydantic BaseModel for FastMCP validation)
# ============================================================================


class SearchResult(BaseModel):
    """Individual search result item.

    Example:
        {
            "url": "https://modelcontextprotocol.io/docs/concepts/transports",
            "title": "Transports",
            "score": 3.412,
            "snippet": "Transports in MCP provide the foundation for communication..."
        }
    """

    url: str = Field(description="Document URL, usable with fetch_mcp_doc")
    title: str = Field(description="Human-readable document title")
    score: float = Field(description="BM25 relevance score rounded to 3 decimals (higher is better)")
    snippet: str = Field(description="Short preview of the page content")


class SearchDocsResponse(BaseModel):
    """Response model for the search_mcp_docs tool.

    ``results`` is always a list, empty when nothing matched or on error.
    """

    results: list[SearchResult] = Field(default_factory=list, description="Ranked results")
    query: str | None = Field(default=None, description="Original query (echoed on error)")
    error: str | None = Field(default=None, description="Error message if search failed")


class FetchDocResponse(BaseModel):
    """Response model for the fetch_mcp_doc tool.

    Example Error Response:
        {
            "url": "https://example.com/doc",
            "title": "",
            "content": "",
            "error": "Failed to fetch document"
        }
    """

    url: str = Field(description="Document URL")
    title: str = Field(description="Document title")
    content: str = Field(description="Full document content")
    error: str | None = Field(default=None, description="Error message if fetch failed")
