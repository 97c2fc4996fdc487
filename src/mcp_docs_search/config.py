"""Centralized configuration for mcp-docs-search using Pydantic Settings."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strictly typed configuration loaded from environment variables.

    Every variable carries the ``MCP_DOCS_`` prefix, e.g. ``MCP_DOCS_LOG_LEVEL``.
    Values are validated once at startup.
    """

    model_config = SettingsConfigDict(
        env_prefix="MCP_DOCS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",  # Ignore extra env vars not defined in model
    )

    # Server identity
    server_name: str = Field(default="mcp-docs-search", description="Name advertised to MCP clients")
    server_version: str = Field(default="0.1.0", description="Version advertised to MCP clients")

    # Corpus source
    llms_txt_url: str = Field(
        default="https://modelcontextprotocol.io/llms.txt",
        description="llms.txt listing the documentation pages to index",
    )
    allowed_url_prefixes: str = Field(
        default="https://modelcontextprotocol.io/",
        description="Comma-separated URL prefixes that may be fetched",
    )
    default_base_url: str = Field(
        default="https://modelcontextprotocol.io",
        description="Base used to resolve relative document links",
    )

    # HTTP/Request settings
    http_timeout: float = Field(default=30.0, gt=0, description="HTTP request timeout in seconds")
    user_agent: str = Field(default="mcp-docs-search/1.0", description="User-Agent sent with every request")

    # Results
    default_result_count: int = Field(default=5, ge=1, description="Default number of search results")
    snippet_hydrate_max: int = Field(
        default=5, ge=0, description="Top results whose page content is fetched for snippets"
    )
    snippet_max_chars: int = Field(default=300, ge=20, description="Maximum snippet length")

    # Ranking
    bm25_k1: float = Field(default=1.5, gt=0, description="BM25 term frequency saturation")
    bm25_b: float = Field(default=0.75, ge=0.0, le=1.0, description="BM25 length normalization")
    extra_preserve_terms: str = Field(
        default="", description="Comma-separated terms that must never be stemmed"
    )

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    json_logs: bool = Field(default=True, description="Emit structured JSON logs on stderr")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {value}")
        return normalized.lower()

    @staticmethod
    def _split(value: str) -> list[str]:
        if not value:
            return []
        return [item.strip() for item in value.split(",") if item.strip()]

    def get_allowed_url_prefixes(self) -> list[str]:
        """Get list of URL prefixes documents may be fetched from."""
        return self._split(self.allowed_url_prefixes)

    def get_extra_preserve_terms(self) -> list[str]:
        return [term.lower() for term in self._split(self.extra_preserve_terms)]
