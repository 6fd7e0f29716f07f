"""Render search results as text for the model."""

from collections.abc import Sequence

from duckweb.agent.tools.websearch.models import SearchResult

NO_RESULTS_MESSAGE = (
    "No results were found for your search query. This could be due to "
    "DuckDuckGo's bot detection or the query returned no matches. Please try "
    "rephrasing your search or try again in a few minutes."
)


def format_results(results: Sequence[SearchResult]) -> str:
    """Format results as numbered blocks, each followed by a blank line."""
    if not results:
        return NO_RESULTS_MESSAGE

    lines = [f"Found {len(results)} search results:", ""]
    for item in results:
        lines.append(f"{item.position}. {item.title}")
        lines.append(f"   URL: {item.link}")
        lines.append(f"   Summary: {item.snippet}")
        lines.append("")
    return "\n".join(lines) + "\n"
