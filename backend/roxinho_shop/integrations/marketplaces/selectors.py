"""Ordered CSS-selector cascades for scraping product pages.

Marketplace markup changes without notice, so each field is read through a
list of ``Selector`` entries ordered from most to least trusted. Entries are
evaluated lazily and the first one yielding a valid value wins.
"""
import re
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import TypeVar

from bs4 import BeautifulSoup, Tag

T = TypeVar("T")

_WHITESPACE_RE = re.compile(r"\s+")


def clean_text(text: str | None) -> str:
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()


def read_text(element: Tag) -> str | None:
    return element.get_text(" ", strip=True)


def read_attr(name: str) -> Callable[[Tag], str | None]:
    def _read(element: Tag) -> str | None:
        value = element.get(name)
        if isinstance(value, list):
            value = " ".join(value)
        return value

    return _read


@dataclass(frozen=True)
class Selector:
    css: str
    read: Callable[[Tag], str | None] = read_text


def meta(key: str, attribute: str = "property") -> Selector:
    """Selector for ``<meta {attribute}="{key}" content=...>``."""
    return Selector(f'meta[{attribute}="{key}"]', read_attr("content"))


def _candidates(soup: BeautifulSoup, cascade: Iterable[Selector]) -> Iterator[str]:
    for selector in cascade:
        for element in soup.select(selector.css):
            value = clean_text(selector.read(element))
            if value:
                yield value


def first_text(soup: BeautifulSoup, cascade: Iterable[Selector]) -> str | None:
    """Return the first non-empty value produced by the cascade."""
    return next(_candidates(soup, cascade), None)


def first_valid(
    soup: BeautifulSoup,
    cascade: Iterable[Selector],
    convert: Callable[[str], T | None],
) -> T | None:
    """Return the first cascade value that ``convert`` accepts (not None)."""
    for raw in _candidates(soup, cascade):
        value = convert(raw)
        if value is not None:
            return value
    return None


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")
