"""Page documents moving through the post-processing pipeline"""

import copy
import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import List
from bs4 import BeautifulSoup, Doctype

STYLESHEET_HREF = "styles.css"
SCRIPT_SRC = "script.js"

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{title}</title>
<link rel="stylesheet" href="{stylesheet}">
<script src="{script}" defer></script>
</head>
<body>
{body}
</body>
</html>
"""

# Tags that belong to the shared document shell, never to a page fragment
_SHELL_TAGS = ("script", "link", "style", "meta", "title")

_FENCE_PATTERN = re.compile(r"```(?:html|HTML)?\s*([\s\S]*?)```")


class PageState(str, Enum):
    """Page lifecycle

    DRAFT → CONTACT_WIRED → CTA_WIRED → NAV_NORMALIZED → IMAGES_RESOLVED
    """
    DRAFT = "DRAFT"
    CONTACT_WIRED = "CONTACT_WIRED"
    CTA_WIRED = "CTA_WIRED"
    NAV_NORMALIZED = "NAV_NORMALIZED"
    IMAGES_RESOLVED = "IMAGES_RESOLVED"


@dataclass(frozen=True)
class PageDocument:
    """One page's markup plus its position in the bundle"""
    index: int
    filename: str
    soup: BeautifulSoup
    state: PageState = PageState.DRAFT

    def copy_soup(self) -> BeautifulSoup:
        """Deep copy of the tree; stages mutate the copy, never the input"""
        return copy.copy(self.soup)

    def advance(self, soup: BeautifulSoup, state: PageState) -> "PageDocument":
        return replace(self, soup=soup, state=state)

    def render(self) -> str:
        html = str(self.soup)
        if not html.lstrip().lower().startswith("<!doctype"):
            html = "<!DOCTYPE html>\n" + html
        return html


def page_filenames(count: int) -> List[str]:
    return [f"page{i}.html" for i in range(1, count + 1)]


def clean_fragment(raw: str) -> str:
    """
    Repair a model-authored page fragment.

    Strips code fences, unwraps a full document down to its body children and
    drops shell tags (scripts, stylesheets, meta, title) the shared document
    already provides.

    Returns:
        Cleaned fragment markup (may be empty when nothing usable came back)
    """
    text = (raw or "").strip()
    fence = _FENCE_PATTERN.search(text)
    if fence:
        text = fence.group(1).strip()

    soup = BeautifulSoup(text, "html.parser")
    for node in list(soup.contents):
        if isinstance(node, Doctype):
            node.extract()
    root = soup.body or soup
    for tag in root.find_all(list(_SHELL_TAGS)):
        tag.decompose()
    if soup.body is not None:
        fragment = "".join(str(child) for child in soup.body.contents)
    else:
        if soup.html is not None:
            if soup.head is not None:
                soup.head.decompose()
            soup.html.unwrap()
        fragment = str(soup)
    return fragment.strip()


def wrap_fragment(fragment: str, title: str = "") -> BeautifulSoup:
    """Wrap a body fragment into a standalone document linking the shared stylesheet and script"""
    markup = PAGE_TEMPLATE.format(
        title=title,
        stylesheet=STYLESHEET_HREF,
        script=SCRIPT_SRC,
        body=fragment,
    )
    return BeautifulSoup(markup, "html.parser")


def new_page(index: int, filename: str, fragment: str, title: str = "") -> PageDocument:
    return PageDocument(index=index, filename=filename, soup=wrap_fragment(fragment, title))
