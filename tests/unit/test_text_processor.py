"""Unit tests for title helpers."""

import pytest

from mcp_docs_search.utils.text_processor import (
    format_display_title,
    index_title_variants,
    normalize,
    title_from_url,
)


def test_normalize_collapses_whitespace():
    assert normalize("  Getting \n\t Started ") == "Getting Started"


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://modelcontextprotocol.io/docs/concepts/tools", "Tools"),
        ("https://modelcontextprotocol.io/docs/getting-started/", "Getting Started"),
        ("https://modelcontextprotocol.io/docs/sdk_overview", "Sdk Overview"),
        ("https://modelcontextprotocol.io/docs/index.md", "Docs"),
        ("", "Documentation"),
    ],
)
def test_title_from_url(url, expected):
    assert title_from_url(url) == expected


class TestFormatDisplayTitle:
    URL = "https://modelcontextprotocol.io/docs/concepts/sampling"

    def test_curated_title_wins(self):
        assert format_display_title(self.URL, "Extracted", {self.URL: " Sampling  Guide "}) == "Sampling Guide"

    @pytest.mark.parametrize("extracted", [None, "", "   ", "index", "INDEX.md", "sampling.md"])
    def test_missing_or_generic_titles_use_url(self, extracted):
        assert format_display_title(self.URL, extracted, {}) == "Sampling"

    def test_extracted_title_is_normalized(self):
        assert format_display_title(self.URL, "  Sampling   in MCP ", {}) == "Sampling in MCP"


class TestIndexTitleVariants:
    def test_adds_spelled_out_digit_variant(self):
        variants = index_title_variants("Agent2Agent", "https://modelcontextprotocol.io/docs/agent2agent")

        assert variants == "Agent2Agent Agent to Agent"

    def test_adds_url_slug_variant(self):
        variants = index_title_variants("Build a Server", "https://modelcontextprotocol.io/quickstart/server")

        assert variants == "Build a Server Server"

    def test_duplicates_are_dropped_case_insensitively(self):
        assert index_title_variants("tools", "https://modelcontextprotocol.io/docs/tools") == "tools"
