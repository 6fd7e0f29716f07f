"""DuckDuckGo HTML result page parser."""

from __future__ import annotations

from collections.abc import Iterator
from urllib.parse import SplitResult, parse_qs, urlsplit

from bs4 import BeautifulSoup, Tag
from bs4.builder import ParserRejectedMarkup
from loguru import logger

from duckweb.agent.tools.websearch.models import SearchResult

_RESULT_CLASS = "result"
_RESULT_SELECTOR = f"div.{_RESULT_CLASS}"
_TITLE_SELECTOR = "a.result__a"
_SNIPPET_SELECTOR = ".result__snippet"
_AD_CLASS = "result--ad"
_AD_PATH_SEGMENT = "y.js"
_REDIRECT_PARAM = "uddg"


class SearchResultParser:
    """Extract ranked results from a DuckDuckGo HTML endpoint response."""

    def parse(self, html: str, max_results: int) -> list[SearchResult]:
        """Parse ``html`` into at most ``max_results`` results."""
        return list(self.iter_results(html, max_results))

    def iter_results(self, html: str, max_results: int) -> Iterator[SearchResult]:
        """Yield accepted results in page order, numbering them from 1."""
        if max_results < 1:
            raise ValueError("max_results must be >= 1")
        if not html or not html.strip():
            return

        try:
            soup = BeautifulSoup(html, "html.parser")
        except ParserRejectedMarkup as e:
            logger.debug("Search page rejected by HTML parser: {}", e)
            return

        position = 0
        for container in soup.select(_RESULT_SELECTOR):
            # Nested containers belong to their outermost result.
            if container.find_parent("div", class_=_RESULT_CLASS) is not None:
                continue

            result = self._parse_container(container)
            if result is None:
                continue

            position += 1
            result.position = position
            yield result
            if position >= max_results:
                return

    def _parse_container(self, container: Tag) -> SearchResult | None:
        if _AD_CLASS in (container.get("class") or []):
            return None

        anchor = container.select_one(_TITLE_SELECTOR)
        if anchor is None:
            return None

        href = anchor.get("href")
        if not isinstance(href, str) or not href.strip():
            return None
        href = href.strip()

        if is_ad_link(href):
            return None

        link = resolve_result_link(href)
        if link is None:
            logger.debug("Skipping result with unresolvable link: {}", href[:200])
            return None
        if is_ad_link(link):
            return None

        title = clean_text(anchor.get_text())
        if not title:
            return None

        snippet_node = container.select_one(_SNIPPET_SELECTOR)
        snippet = clean_text(snippet_node.get_text()) if snippet_node is not None else ""

        return SearchResult(title=title, link=link, snippet=snippet)


def clean_text(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return " ".join(text.split())


def is_ad_link(url: str) -> bool:
    """Check whether a link points at DuckDuckGo's ad click tracker."""
    parts = _split_url(url)
    if parts is None:
        return False
    return _AD_PATH_SEGMENT in parts.path.split("/")


def resolve_result_link(href: str) -> str | None:
    """
    Resolve a result href to an absolute http(s) destination.

    Redirect wrappers (``//duckduckgo.com/l/?uddg=<escaped url>&rut=...``) are
    unwrapped to the escaped destination. Returns None when the wrapper cannot
    be decoded or the destination is not an absolute URL.
    """
    if href.startswith("//"):
        href = "https:" + href

    parts = _split_url(href)
    if parts is None:
        return None
    if _is_redirect_wrapper(parts.netloc, parts.path):
        try:
            params = parse_qs(parts.query, errors="strict")
        except UnicodeDecodeError:
            return None
        values = params.get(_REDIRECT_PARAM)
        if not values or not values[0].strip():
            return None
        href = values[0].strip()
        if href.startswith("//"):
            href = "https:" + href
        parts = _split_url(href)
        if parts is None:
            return None

    if parts.scheme.lower() not in {"http", "https"} or not parts.netloc:
        return None
    return href


def _split_url(url: str) -> SplitResult | None:
    # urlsplit raises on malformed bracketed hosts such as "http://[::1"
    try:
        return urlsplit(url)
    except ValueError:
        return None


def _is_redirect_wrapper(netloc: str, path: str) -> bool:
    host = netloc.lower().split(":", 1)[0]
    if host and host != "duckduckgo.com" and not host.endswith(".duckduckgo.com"):
        return False
    return path == "/l" or path.startswith("/l/")
