"""Unit tests for DocsCache link loading, page caching and rebuilds."""

import asyncio
import logging
from unittest.mock import AsyncMock

import httpx
import pytest

from mcp_docs_search.config import Settings
from mcp_docs_search.services.cache_service import DocsCache


LLMS_URL = "https://modelcontextprotocol.io/llms.txt"
TOOLS_URL = "https://modelcontextprotocol.io/docs/concepts/tools"
AGENT_URL = "https://modelcontextprotocol.io/docs/agent2agent"


class TestEnsureReady:
    """Link-only startup."""

    @pytest.mark.asyncio
    async def test_indexes_curated_titles_without_content(self, cache):
        await cache.ensure_ready()

        assert cache.links_loaded
        assert cache.index is not None
        assert cache.index.size == 4
        assert all(doc.content == "" for doc in cache.index.documents)
        assert cache.url_titles[TOOLS_URL] == "Tools"
        assert set(cache.url_cache.values()) == {None}

    @pytest.mark.asyncio
    async def test_index_titles_include_variants(self, cache):
        await cache.ensure_ready()

        titles = {doc.uri: doc.index_title for doc in cache.index.documents}
        assert titles[AGENT_URL] == "Agent2Agent Agent to Agent"

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_load(self, cache, requested_urls):
        await asyncio.gather(cache.ensure_ready(), cache.ensure_ready(), cache.ensure_ready())

        assert requested_urls.count(LLMS_URL) == 1
        assert cache.index.size == 4

    @pytest.mark.asyncio
    async def test_load_failure_propagates_and_allows_retry(self, cache, doc_routes):
        original = doc_routes.pop(LLMS_URL)

        with pytest.raises(httpx.HTTPStatusError):
            await cache.ensure_ready()
        assert not cache.links_loaded

        doc_routes[LLMS_URL] = original
        await cache.ensure_ready()
        assert cache.links_loaded

    @pytest.mark.asyncio
    async def test_reset_forgets_everything(self, cache, requested_urls):
        await cache.ensure_ready()

        cache.reset()

        assert cache.index is None
        assert cache.url_cache == {}
        assert cache.url_titles == {}
        await cache.ensure_ready()
        assert requested_urls.count(LLMS_URL) == 2


class TestEnsurePage:
    """On-demand page fetches."""

    @pytest.mark.asyncio
    async def test_fetches_once_then_serves_from_cache(self, cache, requested_urls):
        await cache.ensure_ready()

        first = await cache.ensure_page(TOOLS_URL)
        second = await cache.ensure_page(TOOLS_URL)

        assert first is second
        assert first.title == "Tools"
        assert first.content.startswith("# Tools")
        assert requested_urls.count(TOOLS_URL) == 1

    @pytest.mark.asyncio
    async def test_relative_url_shares_cache_entry(self, cache, requested_urls):
        await cache.ensure_ready()

        page = await cache.ensure_page("/docs/concepts/tools")

        assert page.url == TOOLS_URL
        assert cache.url_cache[TOOLS_URL] is page

    @pytest.mark.asyncio
    async def test_uncurated_page_uses_extracted_title(self, cache):
        page = await cache.ensure_page("https://modelcontextprotocol.io/docs/concepts/resources")

        assert page.title == "Resources"

    @pytest.mark.asyncio
    async def test_http_failure_is_cached_as_none(self, cache, caplog):
        await cache.ensure_ready()

        with caplog.at_level(logging.WARNING):
            page = await cache.ensure_page(AGENT_URL)

        assert page is None
        assert AGENT_URL in cache.url_cache
        assert cache.url_cache[AGENT_URL] is None
        assert any("Failed to fetch" in record.message for record in caplog.records)

    @pytest.mark.asyncio
    async def test_malformed_url_is_cached_as_none(self, cache):
        url = "https://modelcontextprotocol.io/docs/a\x01b"

        page = await cache.ensure_page(url)

        assert page is None
        assert cache.url_cache[url] is None

    @pytest.mark.asyncio
    async def test_unexpected_cleaning_error_is_cached_as_none(self, cache, caplog):
        cache.fetcher.fetch_and_clean = AsyncMock(side_effect=RuntimeError("parser crashed"))

        with caplog.at_level(logging.WARNING):
            page = await cache.ensure_page(TOOLS_URL)

        assert page is None
        assert cache.url_cache[TOOLS_URL] is None
        assert any("parser crashed" in record.message for record in caplog.records)

    @pytest.mark.asyncio
    async def test_disallowed_url_returns_none(self, cache, requested_urls):
        page = await cache.ensure_page("https://example.com/private")

        assert page is None
        assert requested_urls == []


class TestRebuild:
    @pytest.mark.asyncio
    async def test_rebuild_swaps_in_fresh_index_with_cached_content(self, cache):
        await cache.ensure_ready()
        original = cache.index
        assert original.search("executable") == []

        await cache.ensure_page(TOOLS_URL)
        rebuilt = await cache.rebuild()

        assert rebuilt is cache.index
        assert rebuilt is not original
        assert rebuilt.size == original.size
        assert rebuilt.search("executable")[0].document.uri == TOOLS_URL
        # the previous snapshot is untouched
        assert original.search("executable") == []


class TestConfiguration:
    def test_extra_preserve_terms_reach_the_analyzer(self, monkeypatch):
        monkeypatch.setenv("MCP_DOCS_EXTRA_PRESERVE_TERMS", "streaming")

        cache = DocsCache(Settings())

        assert cache.new_index().analyzer("streaming") == ["streaming"]

    def test_bm25_settings_reach_the_scorer(self, monkeypatch):
        monkeypatch.setenv("MCP_DOCS_BM25_K1", "0.9")
        monkeypatch.setenv("MCP_DOCS_BM25_B", "0.3")

        params = DocsCache(Settings()).new_index().scorer.params

        assert (params.k1, params.b) == (0.9, 0.3)

    @pytest.mark.asyncio
    async def test_close_releases_fetcher(self, cache):
        fetcher = cache.fetcher

        await cache.close()

        assert cache.fetcher is not fetcher
