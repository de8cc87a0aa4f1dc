"""HTML Helpers — rich-text sanitizing, escaping, and HTML/markdown conversions.

Invariants:
    - sanitize_rich_text keeps only formatting tags; script/style content is dropped entirely
    - Every surviving <a> carries rel="noopener noreferrer" and target="_blank"
    - Only http, https and mailto links survive
    - Empty input is returned unchanged
    - escape_html maps & < > " ' (single quote -> &#039;)
"""

import html as _html
import re

import bleach
from bleach.html5lib_shim import Filter
from bs4 import BeautifulSoup

ALLOWED_TAGS = frozenset({
    "p", "br", "strong", "b", "em", "i", "u", "s", "strike",
    "ul", "ol", "li",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "a", "code", "pre", "blockquote",
})
ALLOWED_ATTRIBUTES = {
    "a": ["href", "target", "rel"],
    "ol": ["start", "type"],
}
ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto"})

_DROP_WITH_CONTENT = ("script", "style", "iframe", "object", "embed", "noscript")


class SafeLinkFilter(Filter):
    """Force safe rel/target on every anchor start tag."""

    def __iter__(self):
        for token in super().__iter__():
            if token["type"] == "StartTag" and token["name"] == "a":
                attrs = dict(token.get("data") or {})
                attrs[(None, "rel")] = "noopener noreferrer"
                attrs[(None, "target")] = "_blank"
                token["data"] = attrs
            yield token


_cleaner = bleach.Cleaner(
    tags=ALLOWED_TAGS,
    attributes=ALLOWED_ATTRIBUTES,
    protocols=ALLOWED_PROTOCOLS,
    strip=True,
    strip_comments=True,
    filters=[SafeLinkFilter],
)


def sanitize_rich_text(value: str | None) -> str | None:
    """Sanitize WYSIWYG HTML for storage and display."""
    if not value:
        return value
    soup = BeautifulSoup(value, "html.parser")
    for tag in soup.find_all(_DROP_WITH_CONTENT):
        tag.decompose()
    return _cleaner.clean(str(soup))


def escape_html(value: str) -> str:
    """Escape plain text for insertion into HTML."""
    return _html.escape(value, quote=True).replace("&#x27;", "&#039;")


def html_to_text(value: str) -> str:
    """Plain-text rendering of an HTML email body."""
    soup = BeautifulSoup(value, "html.parser")
    for tag in soup.find_all(("script", "style", "head")):
        tag.decompose()
    lines = (line.strip() for line in soup.get_text("\n").splitlines())
    return "\n".join(line for line in lines if line)


_BOLD = re.compile(r"\*\*(.+?)\*\*")
_ITALIC = re.compile(r"\*(.+?)\*")
_LIST_ITEM = re.compile(r"^- (.+)$", re.MULTILINE)
_LIST_RUN = re.compile(r"(<li>.*?</li>(<br>)?)+")


def markdown_to_html(markdown: str) -> str:
    """Minimal markdown: **bold**, *italic* and "- " list items.

    Input is escaped first, so the result is safe to embed.
    """
    text = escape_html(markdown)
    text = _BOLD.sub(r"<strong>\1</strong>", text)
    text = _ITALIC.sub(r"<em>\1</em>", text)
    text = _LIST_ITEM.sub(r"<li>\1</li>", text)
    text = "<br>".join(text.split("\n"))
    return _LIST_RUN.sub(
        lambda m: "<ul>" + m.group(0).replace("<br>", "") + "</ul>", text,
    )
