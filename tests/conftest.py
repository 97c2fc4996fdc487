"""Shared test fixtures and configuration."""

from collections.abc import Callable, Mapping
import os

import httpx
import pytest


# Complete test environment that overrides ALL configurable values
TEST_ENV = {
    "MCP_DOCS_SERVER_NAME": "mcp-docs-search-test",
    "MCP_DOCS_LLMS_TXT_URL": "https://modelcontextprotocol.io/llms.txt",
    "MCP_DOCS_ALLOWED_URL_PREFIXES": "https://modelcontextprotocol.io/",
    "MCP_DOCS_DEFAULT_BASE_URL": "https://modelcontextprotocol.io",
    "MCP_DOCS_HTTP_TIMEOUT": "5",
    "MCP_DOCS_USER_AGENT": "mcp-docs-search-tests/1.0",
    "MCP_DOCS_DEFAULT_RESULT_COUNT": "5",
    "MCP_DOCS_SNIPPET_HYDRATE_MAX": "5",
    "MCP_DOCS_SNIPPET_MAX_CHARS": "300",
    "MCP_DOCS_BM25_K1": "1.5",
    "MCP_DOCS_BM25_B": "0.75",
    "MCP_DOCS_EXTRA_PRESERVE_TERMS": "",
    "MCP_DOCS_LOG_LEVEL": "info",
    "MCP_DOCS_JSON_LOGS": "false",
    # Proxy settings - ensure they're cleared for tests
    "http_proxy": "",
    "https_proxy": "",
    "all_proxy": "",
    "no_proxy": "",
}

# Set environment variables immediately when conftest.py is loaded
for key, value in TEST_ENV.items():
    os.environ[key] = value

from mcp_docs_search.config import Settings  # noqa: E402
from mcp_docs_search.search.models import Document  # noqa: E402


LLMS_TXT = """# Model Context Protocol

## Docs

- [Tools](https://modelcontextprotocol.io/docs/concepts/tools): Expose functions
- [Resources](https://modelcontextprotocol.io/docs/concepts/resources): Expose data
- [stdio Transport](/docs/transports/stdio)
- [Agent2Agent](https://modelcontextprotocol.io/docs/agent2agent)
- [Elsewhere](https://example.com/not-allowed)
"""

TOOLS_MARKDOWN = """# Tools

Tools in MCP allow servers to expose executable functions that can be invoked by clients.

## Defining Tools

Each tool has a name, description, and input schema defined using JSON Schema.
"""

RESOURCES_HTML = """<html><head><title>Resources</title><script>var tracking = 1;</script></head>
<body><h1>Resources</h1>
<p>Resources represent data that servers can expose to clients.</p>
</body></html>"""


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Clean environment variables before each test and set test defaults."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def doc_routes() -> dict[str, httpx.Response]:
    """URL -> canned response for the mock HTTP transport."""
    return {
        "https://modelcontextprotocol.io/llms.txt": httpx.Response(200, text=LLMS_TXT),
        "https://modelcontextprotocol.io/docs/concepts/tools": httpx.Response(200, text=TOOLS_MARKDOWN),
        "https://modelcontextprotocol.io/docs/concepts/resources": httpx.Response(200, text=RESOURCES_HTML),
    }


@pytest.fixture
def requested_urls() -> list[str]:
    return []


@pytest.fixture
def mock_client_factory(
    doc_routes: Mapping[str, httpx.Response], requested_urls: list[str]
) -> Callable[[], httpx.AsyncClient]:
    """Build httpx clients served from ``doc_routes``; unknown URLs get a 404."""

    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        requested_urls.append(url)
        response = doc_routes.get(url)
        if response is None:
            return httpx.Response(404, text="not found")
        return httpx.Response(response.status_code, content=response.content, headers=response.headers)

    def factory() -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def three_docs() -> list[Document]:
    return [
        Document(
            uri="https://modelcontextprotocol.io/docs/tools",
            display_title="Tools",
            content="# Tools\n\nTools allow servers to expose executable functions that can be invoked by clients.",
            index_title="Tools MCP",
        ),
        Document(
            uri="https://modelcontextprotocol.io/docs/transports/stdio",
            display_title="stdio Transport",
            content="# stdio Transport\n\nThe stdio transport uses standard input and output streams for communication.",
            index_title="stdio Transport",
        ),
        Document(
            uri="https://modelcontextprotocol.io/docs/resources",
            display_title="Resources",
            content="# Resources\n\nResources represent data that servers can expose to clients for reading.",
            index_title="Resources MCP",
        ),
    ]
