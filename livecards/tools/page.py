"""
In-memory page document and render regions
"""
import logging
from pathlib import Path
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

PARSER = "html.parser"


class RenderRegion:
    """
    A designated subtree whose content is replaced wholesale on every render.

    The region is looked up by class inside a scope element. When it does not
    exist yet it is created next to an anchor: right after it
    (``placement="after"``) or as its last child (``placement="append"``).
    """

    def __init__(self, tag_name: str, class_name: str, placement: str = "after"):
        if placement not in ("after", "append"):
            raise ValueError(f"Invalid placement: {placement}")
        self.tag_name = tag_name
        self.class_name = class_name
        self.placement = placement

    def locate(self, scope: Tag) -> Optional[Tag]:
        return scope.select_one(f"{self.tag_name}.{self.class_name}")

    def render(self, scope: Tag, anchor: Optional[Tag], markup: str) -> Optional[Tag]:
        """
        Replace the region's children with ``markup``.

        Returns the region, or None when it is absent and there is no anchor
        to create it against (the document is left untouched).
        """
        region = self.locate(scope)
        if region is None:
            if anchor is None:
                return None
            region = _new_tag(scope, self.tag_name, self.class_name)
            if self.placement == "after":
                anchor.insert_after(region)
            else:
                anchor.append(region)

        region.clear()
        fragment = BeautifulSoup(markup, PARSER)
        for child in list(fragment.contents):
            region.append(child.extract())
        return region


def _new_tag(scope: Tag, name: str, class_name: str) -> Tag:
    # new_tag lives on the BeautifulSoup object at the root of the tree
    root = scope
    while root.parent is not None:
        root = root.parent
    return root.new_tag(name, attrs={"class": class_name})


class PageDocument:
    """Parsed HTML page that the updaters decorate"""

    def __init__(self, html: str):
        self.soup = BeautifulSoup(html, PARSER)

    @classmethod
    def from_file(cls, path: str) -> "PageDocument":
        logger.info("Loading page from %s", path)
        return cls(Path(path).read_text(encoding="utf-8"))

    def cards(self) -> List[Tag]:
        return self.soup.select(".card")

    def find_card(self, repo_name: str) -> Optional[Tag]:
        """
        Find the card whose GitHub link mentions the repository name.
        The last matching card in document order wins.
        """
        target = None
        for card in self.cards():
            link = card.select_one('a[href*="github.com"]')
            if link is not None and repo_name in link.get("href", ""):
                target = card
        return target

    def footer(self) -> Optional[Tag]:
        return self.soup.select_one(".site-footer")

    def render(self) -> str:
        return str(self.soup)
