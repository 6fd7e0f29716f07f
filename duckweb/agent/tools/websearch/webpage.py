"""Arbitrary webpage fetch adapter."""

import httpx

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
)


async def fetch_webpage(
    *,
    url: str,
    user_agent: str = DEFAULT_USER_AGENT,
    timeout: float = 30.0,
) -> str:
    """GET ``url`` following redirects and return the decoded body."""
    async with httpx.AsyncClient() as client:
        response = await client.get(
            url,
            headers={"User-Agent": user_agent},
            follow_redirects=True,
            timeout=timeout,
        )
        response.raise_for_status()

    return response.text
