"""DuckDuckGo search and webpage extraction pipeline."""

from duckweb.agent.tools.websearch.extractor import ContentExtractor
from duckweb.agent.tools.websearch.formatter import format_results
from duckweb.agent.tools.websearch.models import SearchResult
from duckweb.agent.tools.websearch.parser import SearchResultParser
from duckweb.agent.tools.websearch.ratelimit import RateLimiter, RateLimitStore
from duckweb.agent.tools.websearch.service import FetchService, SearchService

__all__ = [
    "ContentExtractor",
    "FetchService",
    "RateLimitStore",
    "RateLimiter",
    "SearchResult",
    "SearchResultParser",
    "SearchService",
    "format_results",
]
