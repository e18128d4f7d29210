from __future__ import annotations

import re
from html.parser import HTMLParser

_HIDDEN_TAGS = frozenset({"script", "style", "noscript", "template"})
_WHITESPACE_RE = re.compile(r"\s+")


class _TextExtractor(HTMLParser):
    """Tiny HTML parser that collects text outside script/style blocks."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self._hidden_depth = 0
        self._buf: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag in _HIDDEN_TAGS:
            self._hidden_depth += 1

    def handle_endtag(self, tag: str) -> None:
        if tag in _HIDDEN_TAGS and self._hidden_depth:
            self._hidden_depth -= 1

    def handle_data(self, data: str) -> None:
        if not self._hidden_depth:
            self._buf.append(data)

    @property
    def text(self) -> str:
        return " ".join(self._buf)


class MalformedHTMLError(ValueError):
    """Raised when ``html.parser`` gives up on a document."""


def visible_text(html: str) -> str:
    """Return the visible text of ``html`` with whitespace collapsed.

    Raises ``MalformedHTMLError`` for markup the parser cannot handle,
    such as an unknown marked section (``<![bogus[ ... ]]>``).
    """
    parser = _TextExtractor()
    try:
        parser.feed(html)
        parser.close()
    except AssertionError as exc:
        raise MalformedHTMLError(str(exc)) from exc
    return _WHITESPACE_RE.sub(" ", parser.text).strip()
