"""Minimal HTML walking capability used by the extractors and mappers.

Everything above this module talks in terms of find-by-tag,
find-by-attribute, text content and children; BeautifulSoup stays an
implementation detail here.
"""
from __future__ import annotations
import logging
import re
from typing import Iterable, List, Optional, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import Comment

logger = logging.getLogger(__name__)

_SPACES = re.compile(r"[ \t\r\f\v\u00a0]+")
_NEWLINES = re.compile(r"\s*\n\s*")
_SKIP_TAGS = {"script", "style", "noscript", "template"}
_BLOCK_TAGS = {"p", "div", "li", "ul", "ol", "tr", "td", "th", "table", "tbody", "thead",
               "h1", "h2", "h3", "h4", "h5", "h6", "section", "article", "caption"}

Node = Tag


class HtmlWalker:
    def __init__(self, markup: Optional[str], base_url: Optional[str] = None) -> None:
        self.base_url = base_url
        if not isinstance(markup, str):
            markup = ""
        try:
            self.soup = BeautifulSoup(markup, "html.parser")
        except Exception as e:
            logger.warning(f"HTML parser rejected document ({e}); treating as empty")
            self.soup = BeautifulSoup("", "html.parser")
        for bad in self.soup(list(_SKIP_TAGS)):
            bad.decompose()

    @property
    def root(self) -> Tag:
        return self.soup

    # -- queries -----------------------------------------------------------

    def find_by_tag(self, *names: str, within: Optional[Tag] = None) -> List[Tag]:
        scope = within if within is not None else self.soup
        return list(scope.find_all(list(names)))

    def find_first(self, *names: str, within: Optional[Tag] = None) -> Optional[Tag]:
        scope = within if within is not None else self.soup
        return scope.find(list(names))

    def find_by_attribute(self, attr: str, value: Optional[str] = None,
                          within: Optional[Tag] = None) -> List[Tag]:
        scope = within if within is not None else self.soup
        if value is None:
            return list(scope.find_all(attrs={attr: True}))
        return list(scope.find_all(attrs={attr: value}))

    def find_by_class(self, class_name: str, within: Optional[Tag] = None) -> List[Tag]:
        scope = within if within is not None else self.soup
        return list(scope.find_all(class_=class_name))

    def find_by_id(self, element_id: str) -> Optional[Tag]:
        return self.soup.find(id=element_id)

    # -- structure ---------------------------------------------------------

    @staticmethod
    def children(node: Tag, *names: str) -> List[Tag]:
        kids = [c for c in node.children if isinstance(c, Tag)]
        if names:
            kids = [c for c in kids if c.name in names]
        return kids

    @staticmethod
    def parent(node: Tag) -> Optional[Tag]:
        return node.parent if isinstance(node.parent, Tag) else None

    @staticmethod
    def next_element_sibling(node: Tag) -> Optional[Tag]:
        sib = node.find_next_sibling()
        return sib if isinstance(sib, Tag) else None

    @staticmethod
    def previous_element_sibling(node: Tag) -> Optional[Tag]:
        sib = node.find_previous_sibling()
        return sib if isinstance(sib, Tag) else None

    @staticmethod
    def parent_table(node: Tag) -> Optional[Tag]:
        if node.name == "table":
            return node
        return node.find_parent("table")

    @staticmethod
    def own_rows(table: Tag) -> List[Tag]:
        """Rows whose nearest table ancestor is ``table`` itself."""
        return [tr for tr in table.find_all("tr") if tr.find_parent("table") is table]

    # -- content -----------------------------------------------------------

    @staticmethod
    def attr(node: Optional[Tag], name: str) -> str:
        if node is None:
            return ""
        value = node.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return (value or "").strip()

    def resolve_url(self, href: str) -> str:
        if not href:
            return ""
        if self.base_url:
            return urljoin(self.base_url, href)
        return href

    @staticmethod
    def own_text(node: Optional[Tag]) -> str:
        """Text of the direct string children of ``node``, comments excluded."""
        if node is None:
            return ""
        return "".join(str(c) for c in node.children
                       if isinstance(c, NavigableString) and not isinstance(c, Comment))

    @staticmethod
    def raw_text(node: Optional[Union[Tag, BeautifulSoup]]) -> str:
        if node is None:
            return ""
        return node.get_text()

    @classmethod
    def text_content(cls, node: Optional[Tag], breaks: bool = True,
                     keep_newlines: bool = False) -> str:
        """Visible text with whitespace collapsed.

        Block boundaries become spaces. ``<br>`` survives as a line break when
        ``breaks`` is set; newlines written into the markup itself survive only
        with ``keep_newlines``.
        """
        if node is None:
            return ""
        pieces: List[str] = []
        cls._collect(node, pieces, breaks, keep_newlines)
        text = "".join(pieces)
        text = _SPACES.sub(" ", text)
        text = _NEWLINES.sub("\n", text)
        return text.strip()

    @classmethod
    def _collect(cls, node: Tag, out: List[str], breaks: bool, keep_newlines: bool) -> None:
        for el in node.children:
            if isinstance(el, Comment):
                continue
            if isinstance(el, NavigableString):
                s = str(el)
                out.append(s if keep_newlines else s.replace("\n", " "))
            elif isinstance(el, Tag):
                if el.name == "br":
                    out.append("\n" if breaks else " ")
                    continue
                block = el.name in _BLOCK_TAGS
                if block:
                    out.append("\n" if keep_newlines else " ")
                cls._collect(el, out, breaks, keep_newlines)
                if block:
                    out.append("\n" if keep_newlines else " ")

    @classmethod
    def lines(cls, node: Optional[Tag]) -> List[str]:
        text = cls.text_content(node, breaks=True, keep_newlines=True)
        return [ln.strip() for ln in text.split("\n") if ln.strip()]

    @staticmethod
    def single_line(text: Optional[str]) -> str:
        return re.sub(r"\s+", " ", text or "").strip()


def first_matching(nodes: Iterable[Tag], predicate) -> Optional[Tag]:
    for n in nodes:
        if predicate(n):
            return n
    return None


__all__ = ['HtmlWalker', 'Node', 'first_matching']
