"""Tool registry factory for the web tools."""

from pathlib import Path

from loguru import logger

from duckweb.agent.tools.registry import ToolRegistry
from duckweb.agent.tools.web import WebFetchTool, WebSearchTool
from duckweb.agent.tools.websearch.ratelimit import RateLimiter, RateLimitStore
from duckweb.agent.tools.websearch.service import FetchService, SearchService
from duckweb.config.schema import WebToolsConfig


def build_services(web_config: WebToolsConfig | None = None) -> tuple[SearchService, FetchService]:
    """Build search and fetch services, each with its own rate limiter."""
    web_config = web_config or WebToolsConfig()
    rate_cfg = web_config.rate_limit

    store: RateLimitStore | None = None
    if rate_cfg.persist:
        store = RateLimitStore(Path(rate_cfg.state_file))
        logger.debug("Persisting rate limit state to {}", store.path)

    search_limiter = RateLimiter(
        web_config.search.requests_per_minute,
        window_s=rate_cfg.window_s,
        store=store,
    )
    fetch_limiter = RateLimiter(
        web_config.fetch.requests_per_minute,
        window_s=rate_cfg.window_s,
        store=store,
    )

    search = SearchService(web_config.search, limiter=search_limiter)
    fetch = FetchService(web_config.fetch, limiter=fetch_limiter)
    return search, fetch


def build_web_tool_registry(web_config: WebToolsConfig | None = None) -> ToolRegistry:
    """Build a registry holding the ``search`` and ``fetch_content`` tools."""
    search, fetch = build_services(web_config)

    registry = ToolRegistry()
    registry.register(WebSearchTool(service=search))
    registry.register(WebFetchTool(service=fetch))
    return registry
