import pytest
from bs4.builder import ParserRejectedMarkup

from duckweb.agent.tools.websearch.extractor import (
    EMPTY_CONTENT_MESSAGE,
    TRUNCATION_MARKER,
    ContentExtractor,
    normalize_text,
)

MARKED_PAGE = """
<!DOCTYPE html>
<html>
<head>
  <title>Article title</title>
  <style>.marker-style-7f3a { color: red; }</style>
  <script>var marker = "MARKER_SCRIPT_91c2";</script>
</head>
<body>
  <header><h1>MARKER_HEADER_d41e</h1><nav><a href="/">MARKER_NESTED_NAV_55aa</a></nav></header>
  <nav><ul><li>MARKER_NAV_0b7c</li></ul></nav>
  <main>
    <p>First paragraph of the article.</p>
    <script type="application/ld+json">{"marker": "MARKER_INLINE_JSON_e8f0"}</script>
    <p>Second   paragraph
       spans lines.</p>
  </main>
  <footer><p>MARKER_FOOTER_3c19</p><script>MARKER_FOOTER_SCRIPT_ab12()</script></footer>
</body>
</html>
"""


def test_removed_subtrees_never_leak() -> None:
    text = ContentExtractor().extract(MARKED_PAGE)

    for marker in (
        "marker-style-7f3a",
        "MARKER_SCRIPT_91c2",
        "MARKER_HEADER_d41e",
        "MARKER_NESTED_NAV_55aa",
        "MARKER_NAV_0b7c",
        "MARKER_INLINE_JSON_e8f0",
        "MARKER_FOOTER_3c19",
        "MARKER_FOOTER_SCRIPT_ab12",
    ):
        assert marker not in text

    assert text == "Article title First paragraph of the article. Second paragraph spans lines."


def test_whitespace_is_normalized() -> None:
    html = "<p>  Hello\n\n   world </p><div>\tfoo   bar</div>"

    assert ContentExtractor().extract(html) == "Hello world foo bar"


def test_entities_are_decoded_and_comments_dropped() -> None:
    html = "<p>Fish &amp; Chips &lt;3</p><!-- internal note -->"

    assert ContentExtractor().extract(html) == "Fish & Chips <3"


@pytest.mark.parametrize(
    "html",
    [
        "",
        "   ",
        "<html><head><script>only()</script></head><body>  \n </body></html>",
        "<nav>Menu</nav><footer>Copyright</footer>",
    ],
)
def test_empty_content_returns_sentinel(html: str) -> None:
    assert ContentExtractor().extract(html) == EMPTY_CONTENT_MESSAGE


def test_long_content_is_truncated_with_marker() -> None:
    html = "<p>" + "a" * 9000 + "</p>"

    text = ContentExtractor().extract(html)

    assert text == "a" * 8000 + TRUNCATION_MARKER
    assert len(text) == 8000 + len(TRUNCATION_MARKER)


def test_content_at_limit_is_unmodified() -> None:
    body = "b" * 8000

    assert ContentExtractor().extract(f"<p>{body}</p>") == body


def test_custom_max_chars() -> None:
    text = ContentExtractor(max_chars=10).extract("<p>0123456789ABCDEF</p>")

    assert text == "0123456789" + TRUNCATION_MARKER


def test_invalid_max_chars_rejected() -> None:
    with pytest.raises(ValueError):
        ContentExtractor(max_chars=0)


def test_malformed_markup_does_not_raise() -> None:
    html = "<div><p>Unclosed <b>bold <i>text</div></span><p>After"

    assert ContentExtractor().extract(html) == "Unclosed bold text After"


def test_rejected_markup_falls_back_to_tag_strip(monkeypatch) -> None:
    def reject(*args, **kwargs):
        raise ParserRejectedMarkup("bad markup")

    monkeypatch.setattr("duckweb.agent.tools.websearch.extractor.BeautifulSoup", reject)

    html = (
        "<nav>MARKER_NAV</nav><p>Kept &amp; text</p>"
        "<SCRIPT type='text/javascript'>var MARKER_SCRIPT;</SCRIPT><!-- hidden -->"
    )

    assert ContentExtractor().extract(html) == "Kept & text"


def test_normalize_text() -> None:
    assert normalize_text("  a \n\n b\tc  \r\n d ") == "a b c d"
    assert normalize_text("\n \n") == ""
