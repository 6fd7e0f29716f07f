"""DuckDuckGo HTML endpoint adapter."""

import httpx

DEFAULT_ENDPOINT = "https://html.duckduckgo.com/html"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


async def search_duckduckgo(
    *,
    query: str,
    endpoint: str = DEFAULT_ENDPOINT,
    user_agent: str = DEFAULT_USER_AGENT,
    timeout: float = 30.0,
) -> str:
    """Submit the search form and return the raw result page."""
    async with httpx.AsyncClient() as client:
        response = await client.post(
            endpoint,
            data={"q": query, "b": "", "kl": ""},
            headers={
                "User-Agent": user_agent,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "en-US,en;q=0.5",
                "Content-Type": "application/x-www-form-urlencoded",
            },
            timeout=timeout,
        )
        response.raise_for_status()

    return response.text
