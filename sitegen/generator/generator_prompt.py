"""Page generator system prompt and per-page prompt builder"""
from typing import Sequence

from sitegen.config.rules import DesignGuide
from sitegen.core.contact_extractor import ContactInfo

GENERATOR_SYSTEM_PROMPT = """
You are a front-end engineer writing ONE page of a multi-page static website.

### Output contract (CRITICAL)
- Return ONLY the markup that belongs inside <body>
- NO <!DOCTYPE>, <html>, <head> or <body> tags
- NO <script>, <style>, <link> or <meta> tags; one shared stylesheet and script are added for you
- No Markdown, no explanations; if you must fence, use a single ```html block

### Structure
- <header> with a logo element (class="logo") and a <nav> listing the allowed pages
- <main> with 3-7 meaningful <section> elements following the site plan for THIS page
- <footer> with the brand and copyright
- Semantic HTML, descriptive class names (hero, card, grid, btn, btn-primary, ...)
- If this page has a contact section, give it id="contact"

### Links & calls-to-action
- Link pages ONLY with the allowed filenames (e.g., href="page2.html")
- Call-to-action buttons are <a class="btn ..."> elements
- Use the contact details EXACTLY as given; never invent phone numbers, emails or addresses
- If a detail is not given, leave it out instead of making one up

### Images
- Use placeholder images in this exact form:
  <img src="https://source.unsplash.com/WIDTHxHEIGHT/?keyword1,keyword2" alt="short description">
  e.g. https://source.unsplash.com/1200x600/?team,office
- Pick 1-3 keywords that describe the photo; include at least 1-2 images per page

### Copy
- Professional, specific copy for this business; NO lorem ipsum
"""


def _contact_lines(contact: ContactInfo) -> str:
    lines = []
    if contact.phone:
        lines.append(f"- Phone: {contact.phone}")
    if contact.whatsapp:
        lines.append(f"- WhatsApp: {contact.whatsapp}")
    if contact.email:
        lines.append(f"- Email: {contact.email}")
    if contact.address:
        lines.append(f"- Address: {contact.address}")
    return "\n".join(lines) if lines else "- (none provided; do not invent any)"


def build_page_prompt(
    description: str,
    site_plan: str,
    guide: DesignGuide,
    page_number: int,
    filenames: Sequence[str],
    contact: ContactInfo,
) -> str:
    return (
        f"Website description:\n{description.strip()}\n\n"
        f"Site plan:\n{site_plan}\n\n"
        f"Design guide: {guide.label}. {guide.tone}\n\n"
        f"Allowed filenames: {', '.join(filenames)}\n"
        f"You are writing page {page_number} of {len(filenames)}: {filenames[page_number - 1]}\n\n"
        f"Contact details (copy verbatim):\n{_contact_lines(contact)}\n\n"
        f"Return only the body fragment for {filenames[page_number - 1]}."
    )
