"""
Contact wiring - rewrites contact links and the contact block to the extracted ContactInfo
"""
import logging
import re
from typing import Optional
from bs4 import BeautifulSoup, Tag

from sitegen.core.contact_extractor import ContactInfo
from sitegen.core.page_document import PageDocument, PageState
from sitegen.utils.sanitization import escape_attribute, escape_html

logger = logging.getLogger(__name__)

CONTACT_SECTION_ID = "contact"
CONTACT_BLOCK_CLASSES = ["contact-info", "contact-details"]

_WHATSAPP_MARKERS = ("wa.me/", "api.whatsapp.com", "whatsapp://")
_PHONE_TEXT = re.compile(r"(?:\d[\s().+-]*){7,}")


def render_contact_block(contact: ContactInfo) -> str:
    """Canonical markup for the available contact fields"""
    items = []
    if contact.phone:
        items.append(
            f'<p class="contact-item contact-phone"><strong>Phone:</strong> '
            f'<a href="{contact.tel_href()}">{escape_html(contact.phone)}</a></p>'
        )
    whatsapp_href = contact.whatsapp_href()
    if whatsapp_href:
        shown = contact.whatsapp or contact.phone
        items.append(
            f'<p class="contact-item contact-whatsapp"><strong>WhatsApp:</strong> '
            f'<a href="{whatsapp_href}" target="_blank" rel="noopener noreferrer">{escape_html(shown)}</a></p>'
        )
    if contact.email:
        items.append(
            f'<p class="contact-item contact-email"><strong>Email:</strong> '
            f'<a href="{escape_attribute(contact.mailto_href())}">{escape_html(contact.email)}</a></p>'
        )
    if contact.address:
        items.append(
            f'<p class="contact-item contact-address"><strong>Address:</strong> {escape_html(contact.address)}</p>'
        )
    return '<div class="contact-info">\n' + "\n".join(items) + "\n</div>"


def _contact_block_tag(contact: ContactInfo) -> Tag:
    return BeautifulSoup(render_contact_block(contact), "html.parser").div


def _link_kind(href: str) -> Optional[str]:
    lowered = href.strip().lower()
    if lowered.startswith("tel:"):
        return "phone"
    if any(marker in lowered for marker in _WHATSAPP_MARKERS):
        return "whatsapp"
    if lowered.startswith("mailto:"):
        return "email"
    return None


def _replace_display_value(anchor: Tag, kind: str, contact: ContactInfo) -> None:
    """Swap a displayed number/address for the verbatim value when the anchor holds plain text"""
    if anchor.find(True) is not None:
        return
    text = anchor.get_text()
    if kind in ("phone", "whatsapp") and _PHONE_TEXT.search(text):
        value = contact.phone if kind == "phone" else (contact.whatsapp or contact.phone)
        if value:
            anchor.string = value
    elif kind == "email" and "@" in text and contact.email:
        anchor.string = contact.email


def _wire_contact_block(soup: BeautifulSoup, contact: ContactInfo) -> str:
    section = soup.find(id=CONTACT_SECTION_ID)
    if section is not None:
        block = section.find(class_=CONTACT_BLOCK_CLASSES) or section.find("address")
        if block is not None:
            block.replace_with(_contact_block_tag(contact))
            return "replaced"
        heading = section.find(["h1", "h2", "h3"])
        if heading is not None:
            heading.insert_after(_contact_block_tag(contact))
        else:
            section.insert(0, _contact_block_tag(contact))
        return "inserted"

    # No contact section: real details still go into the footer
    body = soup.body or soup
    footer = body.find("footer")
    if footer is None:
        footer = soup.new_tag("footer", attrs={"class": "site-footer"})
        body.append(footer)
    block = footer.find(class_=CONTACT_BLOCK_CLASSES)
    if block is not None:
        block.replace_with(_contact_block_tag(contact))
    else:
        footer.insert(0, _contact_block_tag(contact))
    return "footer"


def wire_contacts(page: PageDocument, contact: ContactInfo) -> PageDocument:
    """
    Rewire tel:, WhatsApp and mailto: anchors to the extracted contact values.

    Anchors whose contact field is missing from ContactInfo are pointed at the
    bundle's default CTA target instead of keeping a model-invented value.

    Args:
        page: Page in DRAFT state
        contact: Extracted contact info

    Returns:
        New PageDocument in CONTACT_WIRED state
    """
    soup = page.copy_soup()
    fallback = contact.default_cta_target()
    rewired = 0

    for anchor in soup.find_all("a", href=True):
        kind = _link_kind(anchor["href"])
        if kind is None:
            continue
        if kind == "phone":
            target = contact.tel_href()
        elif kind == "whatsapp":
            target = contact.whatsapp_href()
        else:
            target = contact.mailto_href()
        anchor["href"] = target or fallback
        if target:
            _replace_display_value(anchor, kind, contact)
        rewired += 1

    block_action = "skipped"
    if not contact.is_empty():
        block_action = _wire_contact_block(soup, contact)

    logger.debug(
        f"[Contact] Wired {page.filename} | "
        f"links_rewired: {rewired} | "
        f"contact_block: {block_action}"
    )
    return page.advance(soup, PageState.CONTACT_WIRED)
