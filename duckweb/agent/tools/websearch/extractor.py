"""Plain-text extraction from arbitrary webpages."""

from __future__ import annotations

import html as html_lib
import re

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from loguru import logger

DEFAULT_MAX_CHARS = 8000
TRUNCATION_MARKER = "... [content truncated]"
EMPTY_CONTENT_MESSAGE = "No readable content found on this page."

_REMOVED_TAGS = ("script", "style", "nav", "header", "footer")

_REMOVED_BLOCK_RE = re.compile(
    r"<({tags})\b[^>]*>.*?</\1\s*>".format(tags="|".join(_REMOVED_TAGS)),
    re.IGNORECASE | re.DOTALL,
)
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


class ContentExtractor:
    """Reduce an HTML document to bounded, whitespace-normalized text."""

    def __init__(self, max_chars: int = DEFAULT_MAX_CHARS):
        if max_chars < 1:
            raise ValueError("max_chars must be >= 1")
        self.max_chars = max_chars

    def extract(self, html: str) -> str:
        text = normalize_text(self._visible_text(html or ""))
        if not text:
            return EMPTY_CONTENT_MESSAGE
        if len(text) > self.max_chars:
            return text[: self.max_chars] + TRUNCATION_MARKER
        return text

    def _visible_text(self, html: str) -> str:
        try:
            soup = BeautifulSoup(html, "html.parser")
        except ParserRejectedMarkup as e:
            logger.debug("HTML parser rejected page markup, using tag strip: {}", e)
            return _strip_tags(html)

        # Subtrees go before any text is read.
        for node in soup.find_all(list(_REMOVED_TAGS)):
            if node.decomposed:
                continue
            node.decompose()
        return soup.get_text(separator="\n")


def normalize_text(text: str) -> str:
    """Trim lines, drop blank ones, join with spaces and collapse whitespace."""
    lines = (line.strip() for line in text.splitlines())
    joined = " ".join(line for line in lines if line)
    return _WHITESPACE_RE.sub(" ", joined).strip()


def _strip_tags(html: str) -> str:
    text = _COMMENT_RE.sub(" ", html)
    text = _REMOVED_BLOCK_RE.sub(" ", text)
    text = _TAG_RE.sub(" ", text)
    return html_lib.unescape(text)
