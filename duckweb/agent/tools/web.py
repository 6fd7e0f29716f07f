"""Web tools: DuckDuckGo search and webpage content fetch."""

from __future__ import annotations

from typing import Any

from duckweb.agent.tools.base import Tool
from duckweb.agent.tools.websearch.service import FetchService, SearchService


class WebSearchTool(Tool):
    """Search the web with DuckDuckGo."""

    name = "search"
    description = "Search DuckDuckGo and return formatted results with titles, URLs and summaries."
    parameters = {
        "type": "object",
        "properties": {
            "query": {"type": "string", "description": "The search query string"},
            "max_results": {
                "type": "integer",
                "minimum": 1,
                "maximum": 20,
                "description": "Maximum number of results to return (default 10)",
            },
        },
        "required": ["query"],
    }

    def __init__(self, service: SearchService | None = None):
        self.service = service or SearchService()

    async def execute(self, query: str, max_results: int | None = None, **kwargs: Any) -> str:
        return await self.service.search(query, max_results)


class WebFetchTool(Tool):
    """Fetch a webpage and return its readable text."""

    name = "fetch_content"
    description = "Fetch and parse content from a webpage URL, returning plain text."
    parameters = {
        "type": "object",
        "properties": {
            "url": {"type": "string", "description": "The webpage URL to fetch content from"},
        },
        "required": ["url"],
    }

    def __init__(self, service: FetchService | None = None):
        self.service = service or FetchService()

    async def execute(self, url: str, **kwargs: Any) -> str:
        return await self.service.fetch_content(url)
