"""Plain-text extraction from the HTML biographies imported into the catalog."""

from __future__ import annotations

import html
import re

_BR = re.compile(r"<br\s*/?>", re.IGNORECASE)
_BLOCK_END = re.compile(r"</(?:p|div)>", re.IGNORECASE)
_TAG = re.compile(r"<[^>]*>")
_SPACES = re.compile(r"[ \t]+")
_BLANK_RUNS = re.compile(r"\n{3,}")
_PULLQUOTE = re.compile(r"""<p[^>]*class=["']pullquote["'][^>]*>(.*?)</p>""", re.IGNORECASE | re.DOTALL)
_PARAGRAPH = re.compile(r"<p[^>]*>(.*?)</p>", re.IGNORECASE | re.DOTALL)


def extract_text_from_html(markup: str | None) -> str:
    """
    Strip tags from an HTML fragment, keeping line and paragraph breaks.

    <br> becomes a newline and </p>, </div> a blank line; entities are
    unescaped and runs of spaces collapsed.
    """
    if not markup:
        return ""

    text = _BR.sub("\n", markup)
    text = _BLOCK_END.sub("\n\n", text)
    text = _TAG.sub("", text)
    text = html.unescape(text).replace("\xa0", " ")
    text = _SPACES.sub(" ", text)
    text = _BLANK_RUNS.sub("\n\n", text)

    lines = [line.strip() for line in text.split("\n")]
    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    return "\n".join(lines).strip()


def extract_bio_from_html(markup: str | None) -> str:
    """Text of the first pullquote paragraph, else the first paragraph, else everything."""
    if not markup:
        return ""

    match = _PULLQUOTE.search(markup) or _PARAGRAPH.search(markup)
    if match:
        return extract_text_from_html(match.group(1))
    return extract_text_from_html(markup)
