"""Conftest for unit tests - automatically mark all tests as unit tests."""

import pytest

from mcp_docs_search.config import Settings
from mcp_docs_search.services.cache_service import DocsCache
from mcp_docs_search.utils.doc_fetcher import DocFetcher
from mcp_docs_search.utils.url_validator import UrlValidator


def pytest_collection_modifyitems(config, items):
    """Automatically mark all tests in the unit directory as unit tests."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def validator(settings: Settings) -> UrlValidator:
    return UrlValidator(settings.get_allowed_url_prefixes(), settings.default_base_url)


@pytest.fixture
def fetcher(settings, validator, mock_client_factory) -> DocFetcher:
    return DocFetcher(settings, validator, client=mock_client_factory())


@pytest.fixture
def cache(settings, mock_client_factory) -> DocsCache:
    """DocsCache whose fetchers talk to the mock transport."""

    def factory() -> DocFetcher:
        validator = UrlValidator(settings.get_allowed_url_prefixes(), settings.default_base_url)
        return DocFetcher(settings, validator, client=mock_client_factory())

    return DocsCache(settings, fetcher_factory=factory)
