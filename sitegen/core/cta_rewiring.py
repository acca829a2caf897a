"""
CTA rewiring - points every placeholder call-to-action at the bundle's derived default target
"""
import logging
from typing import Optional
from bs4 import BeautifulSoup, Tag

from sitegen.config.rules import classify_cta_text, has_button_marker, is_placeholder_target
from sitegen.core.contact_extractor import ContactInfo
from sitegen.core.page_document import PageDocument, PageState

logger = logging.getLogger(__name__)


def _class_list(tag: Tag) -> list:
    classes = tag.get("class") or []
    if isinstance(classes, str):
        return classes.split()
    return list(classes)


def classify_cta(tag: Tag) -> Optional[str]:
    """
    Classify an anchor or button as a CTA candidate.

    Returns:
        Intent from the vocabulary table, "button" for style-only matches, or None
    """
    intent = classify_cta_text(tag.get_text(" ", strip=True))
    if intent:
        return intent
    label = tag.get("aria-label") or tag.get("title") or ""
    intent = classify_cta_text(label)
    if intent:
        return intent
    if has_button_marker(_class_list(tag)):
        return "button"
    return None


def _is_form_button(button: Tag) -> bool:
    if button.find_parent("form") is not None:
        return True
    return (button.get("type") or "").lower() in ("submit", "reset")


def _apply_target(anchor: Tag, target: str) -> None:
    anchor["href"] = target
    if target.startswith("https://wa.me/"):
        anchor["target"] = "_blank"
        anchor["rel"] = ["noopener", "noreferrer"]


def _button_to_anchor(soup: BeautifulSoup, button: Tag, target: str) -> Tag:
    """Replace a button with an anchor carrying the same attributes and children"""
    attrs = {k: v for k, v in button.attrs.items() if k not in ("type", "onclick", "disabled", "form", "name", "value")}
    anchor = soup.new_tag("a", attrs=attrs)
    for child in list(button.contents):
        anchor.append(child.extract())
    _apply_target(anchor, target)
    button.replace_with(anchor)
    return anchor


def rewire_ctas(page: PageDocument, contact: ContactInfo) -> PageDocument:
    """
    Rewrite placeholder CTA targets and convert non-form CTA buttons to anchors.

    Running the stage twice yields the same markup as running it once.

    Args:
        page: Page in CONTACT_WIRED state
        contact: Extracted contact info, source of the default target

    Returns:
        New PageDocument in CTA_WIRED state
    """
    soup = page.copy_soup()
    target = contact.default_cta_target()
    anchors_rewired = 0
    buttons_converted = 0

    for anchor in soup.find_all("a"):
        if not is_placeholder_target(anchor.get("href")):
            continue
        if classify_cta(anchor) is None:
            continue
        _apply_target(anchor, target)
        anchors_rewired += 1

    for button in soup.find_all("button"):
        if _is_form_button(button):
            continue
        intent = classify_cta(button)
        if intent is None or intent == "button":
            continue
        _button_to_anchor(soup, button, target)
        buttons_converted += 1

    logger.debug(
        f"[CTA] Rewired {page.filename} | "
        f"target: {target} | "
        f"anchors: {anchors_rewired} | "
        f"buttons_converted: {buttons_converted}"
    )
    return page.advance(soup, PageState.CTA_WIRED)
