"""Shared web search models."""

from dataclasses import dataclass


@dataclass(slots=True)
class SearchResult:
    """One ranked hit parsed from a search result page."""

    title: str
    link: str
    snippet: str = ""
    position: int = 1
