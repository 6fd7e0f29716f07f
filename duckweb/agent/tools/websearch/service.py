"""Rate-limited search and fetch services returning text for the model."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
from loguru import logger

from duckweb.agent.tools.websearch.duckduckgo import search_duckduckgo
from duckweb.agent.tools.websearch.extractor import ContentExtractor
from duckweb.agent.tools.websearch.formatter import format_results
from duckweb.agent.tools.websearch.parser import SearchResultParser
from duckweb.agent.tools.websearch.ratelimit import RateLimiter
from duckweb.agent.tools.websearch.safety import validate_fetch_url
from duckweb.agent.tools.websearch.webpage import fetch_webpage

if TYPE_CHECKING:
    from duckweb.config.schema import WebFetchConfig, WebSearchConfig

SEARCH_RATE_KEY = "search"
FETCH_RATE_KEY = "fetch"


def describe_http_error(error: Exception, timeout_s: float) -> str:
    """Short human-readable reason for a failed outbound request."""
    if isinstance(error, httpx.HTTPStatusError):
        return f"HTTP {error.response.status_code}"
    if isinstance(error, httpx.TimeoutException):
        return f"timed out after {timeout_s:g}s"
    return str(error) or type(error).__name__


class SearchService:
    """DuckDuckGo search behind the search-class rate limiter."""

    def __init__(
        self,
        config: WebSearchConfig | None = None,
        *,
        limiter: RateLimiter | None = None,
        parser: SearchResultParser | None = None,
    ):
        from duckweb.config.schema import WebSearchConfig

        self.config = config or WebSearchConfig()
        self.limiter = limiter or RateLimiter(self.config.requests_per_minute)
        self.parser = parser or SearchResultParser()

    async def search(self, query: str, max_results: int | None = None) -> str:
        """Search and return formatted results, or an ``Error:`` string."""
        if not isinstance(query, str) or not query.strip():
            return f"Error: query must be a non-empty string (received: {query!r})"

        count = self.clamp_max_results(max_results)
        await self.limiter.acquire(SEARCH_RATE_KEY)

        logger.info("DuckDuckGo search: {} (max_results={})", query[:100], count)
        try:
            page = await search_duckduckgo(
                query=query,
                endpoint=self.config.endpoint,
                user_agent=self.config.user_agent,
                timeout=self.config.timeout_s,
            )
        except httpx.HTTPError as e:
            reason = describe_http_error(e, self.config.timeout_s)
            logger.warning("DuckDuckGo search failed: {}", reason)
            return f"Error: search request failed ({reason})"
        except Exception as e:
            logger.exception("Unexpected error during search")
            return f"Error: search request failed ({e})"

        try:
            results = self.parser.parse(page, count)
            logger.debug("Parsed {} results for: {}", len(results), query[:100])
            return format_results(results)
        except Exception as e:
            logger.exception("Unexpected error parsing search results")
            return f"Error: could not read search results ({e})"

    def clamp_max_results(self, max_results: Any) -> int:
        if max_results is None:
            max_results = self.config.default_max_results
        try:
            value = int(max_results)
        except (TypeError, ValueError):
            value = self.config.default_max_results
        return min(max(value, 1), self.config.max_results_limit)


class FetchService:
    """Webpage text extraction behind the fetch-class rate limiter."""

    def __init__(
        self,
        config: WebFetchConfig | None = None,
        *,
        limiter: RateLimiter | None = None,
        extractor: ContentExtractor | None = None,
    ):
        from duckweb.config.schema import WebFetchConfig

        self.config = config or WebFetchConfig()
        self.limiter = limiter or RateLimiter(self.config.requests_per_minute)
        self.extractor = extractor or ContentExtractor(max_chars=self.config.max_chars)

    async def fetch_content(self, url: str) -> str:
        """Fetch ``url`` and return its readable text, or an ``Error:`` string."""
        if not isinstance(url, str) or not url.strip():
            return f"Error: url must be a non-empty string (received: {url!r})"

        url = url.strip()
        ok, reason = validate_fetch_url(
            url,
            allow_private_network=self.config.allow_private_network,
        )
        if not ok:
            return f"Error: invalid URL {url!r}: {reason}"

        await self.limiter.acquire(FETCH_RATE_KEY)

        logger.info("Fetching webpage: {}", url)
        try:
            page = await fetch_webpage(
                url=url,
                user_agent=self.config.user_agent,
                timeout=self.config.timeout_s,
            )
        except httpx.HTTPError as e:
            reason = describe_http_error(e, self.config.timeout_s)
            logger.warning("Fetching {} failed: {}", url, reason)
            return f"Error: could not access the webpage ({reason})"
        except Exception as e:
            logger.exception("Unexpected error fetching {}", url)
            return f"Error: could not access the webpage ({e})"

        try:
            return self.extractor.extract(page)
        except Exception as e:
            logger.exception("Unexpected error extracting text from {}", url)
            return f"Error: could not extract webpage content ({e})"
