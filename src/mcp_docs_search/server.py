"""MCP server exposing documentation search over stdio.

Tools:
    search_mcp_docs(query, k)  -> ranked results with snippets
    fetch_mcp_doc(uri)         -> full page content

Usage:
    mcp-docs-search
    python -m mcp_docs_search
"""

import asyncio
import logging
from typing import Annotated

from fastmcp import FastMCP
from opentelemetry.trace import SpanKind

from mcp_docs_search.config import Settings
from mcp_docs_search.observability import (
    REQUEST_COUNT,
    REQUEST_LATENCY,
    configure_logging,
    create_span,
    init_tracing,
    track_latency,
    update_trace_context,
)
from mcp_docs_search.service_layer.docs_service import fetch_doc, search_docs
from mcp_docs_search.services.cache_service import DocsCache
from mcp_docs_search.utils.models import FetchDocResponse, SearchDocsResponse


logger = logging.getLogger(__name__)

SEARCH_TOOL = "search_mcp_docs"
FETCH_TOOL = "fetch_mcp_doc"


def create_server(settings: Settings, cache: DocsCache) -> FastMCP:
    """Create the MCP server and register both tools against ``cache``."""

    mcp = FastMCP(
        name=settings.server_name,
        instructions=(
            "Search the MCP protocol documentation with search_mcp_docs, "
            "then read a full page with fetch_mcp_doc using a result URL."
        ),
        mask_error_details=True,
    )
    _register_tools(mcp, settings, cache)
    return mcp


def _register_tools(mcp: FastMCP, settings: Settings, cache: DocsCache) -> None:
    @mcp.tool(name=SEARCH_TOOL, annotations={"title": "Search MCP Docs", "readOnlyHint": True})
    async def search_mcp_docs(
        query: Annotated[str, "Search query string (e.g., 'tool input schema', 'stdio transport')"],
        k: Annotated[int, "Maximum number of results to return"] = settings.default_result_count,
    ) -> SearchDocsResponse:
        """Search MCP protocol documentation with ranked results.

        Uses BM25 ranking with Porter stemming, title boosting and phrase
        (bigram) matching. Each result has url, title, score and snippet;
        pass a url to fetch_mcp_doc to read the whole page.
        """
        update_trace_context(tool=SEARCH_TOOL)
        with (
            track_latency(REQUEST_LATENCY, tool=SEARCH_TOOL),
            create_span(
                "mcp.tool.search_mcp_docs",
                kind=SpanKind.INTERNAL,
                attributes={"search.query": query[:100], "search.k": k},
            ) as span,
        ):
            try:
                results = await search_docs(cache, query, k)
            except Exception as exc:
                logger.error("Search failed for %r: %s", query, exc, exc_info=True)
                REQUEST_COUNT.labels(tool=SEARCH_TOOL, status="error").inc()
                return SearchDocsResponse(results=[], error=f"Search failed: {exc}", query=query)

            span.set_attribute("search.result_count", len(results))
            REQUEST_COUNT.labels(tool=SEARCH_TOOL, status="ok").inc()
            return SearchDocsResponse(results=results)

    @mcp.tool(name=FETCH_TOOL, annotations={"title": "Fetch MCP Doc", "readOnlyHint": True})
    async def fetch_mcp_doc(
        uri: Annotated[str, "Document URI (http/https URL from an allowed documentation domain)"],
    ) -> FetchDocResponse:
        """Fetch full document content by URL.

        Only URLs under the configured documentation domains are allowed;
        relative paths are resolved against the documentation site.
        """
        update_trace_context(tool=FETCH_TOOL)
        with (
            track_latency(REQUEST_LATENCY, tool=FETCH_TOOL),
            create_span("mcp.tool.fetch_mcp_doc", kind=SpanKind.INTERNAL, attributes={"fetch.uri": uri}),
        ):
            try:
                response = await fetch_doc(cache, uri)
            except Exception as exc:
                logger.error("Fetch failed for %s: %s", uri, exc, exc_info=True)
                REQUEST_COUNT.labels(tool=FETCH_TOOL, status="error").inc()
                return FetchDocResponse(url=uri, title="", content="", error=f"Fetch failed: {exc}")

            if response.error:
                logger.warning("Fetch failed for %s: %s", uri, response.error)
            REQUEST_COUNT.labels(tool=FETCH_TOOL, status="error" if response.error else "ok").inc()
            return response


async def warm_cache(cache: DocsCache) -> bool:
    """Load the link index ahead of the first request.

    The HTTP client is closed afterwards because the server runs its own event
    loop; a fresh client is created on first use there.
    """
    try:
        await cache.ensure_ready()
    except Exception as exc:
        logger.warning("Cache initialization warning: %s", exc)
        return False
    finally:
        await cache.close()
    logger.info("Cache initialized successfully")
    return True


def main() -> None:
    settings = Settings()
    configure_logging(settings.log_level, json_output=settings.json_logs)
    init_tracing(service_name=settings.server_name)
    logger.info("Starting %s v%s", settings.server_name, settings.server_version)

    cache = DocsCache(settings)
    asyncio.run(warm_cache(cache))

    mcp = create_server(settings, cache)
    logger.info("Server running on stdio")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
