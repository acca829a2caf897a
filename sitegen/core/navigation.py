"""
Brand & navigation normalization - batch stage over every page of one bundle
"""
import logging
from typing import List, Optional, Sequence, Tuple
from bs4 import BeautifulSoup, Tag

from sitegen.core.page_document import PageDocument, PageState

logger = logging.getLogger(__name__)

DEFAULT_BRAND = "My Website"
LOGO_SELECTORS = (".logo", ".brand", ".navbar-brand", ".site-logo", "#logo", ".site-title")
TITLE_SEPARATOR = " – "


def nav_labels(count: int) -> List[str]:
    """
    Positional navigation labels.

    First page is Home; with three or more pages the last one is Contact;
    every other page is "Page N".
    """
    labels = []
    for i in range(count):
        if i == 0:
            labels.append("Home")
        elif count >= 3 and i == count - 1:
            labels.append("Contact")
        else:
            labels.append(f"Page {i + 1}")
    return labels


def _find_logo(soup: BeautifulSoup) -> Optional[Tag]:
    scope = soup.find("header") or soup
    for selector in LOGO_SELECTORS:
        found = scope.select_one(selector)
        if found is not None:
            return found
    return None


def resolve_brand(pages: Sequence[PageDocument], business_name: Optional[str]) -> str:
    """
    Canonical brand: explicit business name, else the first page's logo text, else a generic fallback.
    """
    if business_name and business_name.strip():
        return business_name.strip()
    if pages:
        logo = _find_logo(pages[0].soup)
        if logo is not None:
            text = logo.get_text(" ", strip=True)
            if text:
                return text
    return DEFAULT_BRAND


def _ensure_header(soup: BeautifulSoup) -> Tag:
    """Return the page header, moved (or created) as the first child of <body>"""
    body = soup.body
    header = body.find("header")
    if header is None:
        header = soup.new_tag("header", attrs={"class": "site-header"})
    else:
        header.extract()
    body.insert(0, header)
    return header


def _stamp_logo(soup: BeautifulSoup, header: Tag, brand: str, home: str) -> None:
    logo = _find_logo(soup)
    if logo is None:
        logo = soup.new_tag("a", attrs={"class": "logo"})
        header.insert(0, logo)
    elif logo.find_parent("header") is not header or logo.find_parent("nav") is not None:
        # The nav is rebuilt from scratch; the logo lives directly in the header
        header.insert(0, logo.extract())
    logo.name = "a"
    for attr in ("src", "srcset", "alt", "width", "height"):
        logo.attrs.pop(attr, None)
    logo.clear()
    logo.string = brand
    logo["href"] = home
    classes = logo.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    if "logo" not in classes:
        logo["class"] = list(classes) + ["logo"]


def _build_nav(soup: BeautifulSoup, entries: Sequence[Tuple[str, str]], current: str) -> Tag:
    nav = soup.new_tag("nav", attrs={"class": "site-nav", "aria-label": "Main navigation"})
    toggle = soup.new_tag(
        "button",
        attrs={
            "class": "nav-toggle",
            "type": "button",
            "aria-label": "Toggle menu",
            "aria-expanded": "false",
        },
    )
    toggle.string = "☰"
    nav.append(toggle)
    ul = soup.new_tag("ul", attrs={"class": "nav-links"})
    for filename, label in entries:
        li = soup.new_tag("li")
        link = soup.new_tag("a", attrs={"href": filename})
        link.string = label
        if filename == current:
            link["class"] = "active"
            link["aria-current"] = "page"
        li.append(link)
        ul.append(li)
    nav.append(ul)
    return nav


def _is_stray_nav(nav: Tag) -> bool:
    """Menus outside <main> and <footer> compete with the rebuilt site nav"""
    if nav.find_parent("nav") is not None:
        return False
    return nav.find_parent("main") is None and nav.find_parent("footer") is None


def _replace_nav(soup: BeautifulSoup, header: Tag, nav: Tag) -> None:
    existing = header.find_all("nav")
    if existing:
        existing[0].replace_with(nav)
    else:
        header.append(nav)
    for stray in soup.body.find_all("nav"):
        if stray is not nav and _is_stray_nav(stray):
            stray.decompose()


def _set_title(soup: BeautifulSoup, text: str) -> None:
    head = soup.head
    title = head.find("title")
    if title is None:
        title = soup.new_tag("title")
        head.append(title)
    title.string = text


def normalize_site(
    pages: Sequence[PageDocument],
    business_name: Optional[str] = None,
) -> Tuple[List[PageDocument], str]:
    """
    Stamp one brand and one navigation list into every page.

    Every page receives the same ordered (filename, label) list; only the
    current page's entry is marked active. The logo always links to the first page.

    Args:
        pages: All pages of the bundle, in bundle order, after CTA rewiring
        business_name: Explicit business name from the description, if any

    Returns:
        (normalized pages in NAV_NORMALIZED state, canonical brand)
    """
    brand = resolve_brand(pages, business_name)
    labels = nav_labels(len(pages))
    entries = [(page.filename, label) for page, label in zip(pages, labels)]
    home = pages[0].filename if pages else "index.html"

    normalized = []
    for page, label in zip(pages, labels):
        soup = page.copy_soup()
        header = _ensure_header(soup)
        _stamp_logo(soup, header, brand, home)
        _replace_nav(soup, header, _build_nav(soup, entries, page.filename))
        _set_title(soup, f"{label}{TITLE_SEPARATOR}{brand}")
        normalized.append(page.advance(soup, PageState.NAV_NORMALIZED))

    logger.info(
        f"[Navigation] ✓ Normalized {len(normalized)} page(s) | "
        f"brand: {brand} | "
        f"entries: {[filename for filename, _ in entries]}"
    )
    return normalized, brand
