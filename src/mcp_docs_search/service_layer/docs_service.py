"""Service layer - documentation search and fetch use cases.

Both use cases work against an explicitly passed DocsCache; there is no
module-level state.
"""

import logging

from mcp_docs_search.observability.metrics import INDEX_DOC_COUNT
from mcp_docs_search.search.snippet import make_snippet
from mcp_docs_search.services.cache_service import DocsCache
from mcp_docs_search.utils.models import FetchDocResponse, SearchResult


logger = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Failed to fetch document"


async def search_docs(cache: DocsCache, query: str, k: int) -> list[SearchResult]:
    """Search the documentation index and build result previews.

    The top ``snippet_hydrate_max`` hits without cached content are fetched
    first so their snippets come from the page body instead of the title.

    Args:
        cache: Cache owning the index and page content
        query: Free-text query
        k: Maximum number of results

    Returns:
        Ranked results, possibly empty
    """
    await cache.ensure_ready()
    index = cache.index
    if index is None:
        return []
    INDEX_DOC_COUNT.set(index.size)

    hits = index.search(query, k)
    logger.debug("Query %r matched %d documents", query, len(hits))

    for hit in hits[: cache.settings.snippet_hydrate_max]:
        if cache.url_cache.get(hit.document.uri) is None:
            await cache.ensure_page(hit.document.uri)

    results: list[SearchResult] = []
    for hit in hits:
        page = cache.url_cache.get(hit.document.uri)
        snippet = make_snippet(
            page.content if page is not None else None,
            hit.document.display_title,
            max_chars=cache.settings.snippet_max_chars,
        )
        results.append(
            SearchResult(
                url=hit.document.uri,
                title=hit.document.display_title,
                score=round(hit.score, 3),
                snippet=snippet,
            )
        )
    return results


async def fetch_doc(cache: DocsCache, uri: str) -> FetchDocResponse:
    """Fetch the full content of a documentation page."""
    await cache.ensure_ready()
    page = await cache.ensure_page(uri)
    if page is None:
        return FetchDocResponse(url=uri, title="", content="", error=FETCH_FAILED_MESSAGE)
    return FetchDocResponse(url=page.url, title=page.title, content=page.content)
