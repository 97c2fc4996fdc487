"""URL allow-listing for documentation sources."""

from __future__ import annotations

from collections.abc import Iterable, Sequence


class URLValidationError(ValueError):
    """Raised when a URL falls outside the allowed documentation domains."""


class UrlValidator:
    """Checks URLs against a fixed set of allowed prefixes.

    Relative URLs are resolved against ``base_url`` before the check, so
    ``/docs/tools`` becomes ``https://modelcontextprotocol.io/docs/tools``.
    """

    def __init__(self, allowed_prefixes: Sequence[str], base_url: str) -> None:
        self.allowed_prefixes = tuple(allowed_prefixes)
        self.base_url = base_url.rstrip("/")

    def is_allowed(self, url: str) -> bool:
        if not url or not isinstance(url, str):
            return False
        return any(url.startswith(prefix) for prefix in self.allowed_prefixes)

    def absolutize(self, url: str) -> str:
        if url.startswith(("http://", "https://")):
            return url
        separator = "" if url.startswith("/") else "/"
        return f"{self.base_url}{separator}{url}"

    def validate(self, url: str) -> str:
        """Return the absolute URL or raise URLValidationError."""
        resolved = self.absolutize(url or "")
        if not self.is_allowed(resolved):
            allowed = ", ".join(self.allowed_prefixes)
            raise URLValidationError(f"URL not allowed: {url}. Allowed domains: {allowed}")
        return resolved

    def validate_many(self, urls: Iterable[str]) -> list[str]:
        return [self.validate(url) for url in urls]
