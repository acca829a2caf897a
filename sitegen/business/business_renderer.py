"""Deterministic HTML builder for structured business content"""
from typing import List, Optional
from urllib.parse import quote

from sitegen.business.business_schemas import PageContent
from sitegen.core.contact_extractor import ContactInfo
from sitegen.core.contact_wiring import render_contact_block
from sitegen.core.page_document import PageDocument, new_page
from sitegen.core.navigation import DEFAULT_BRAND
from sitegen.utils.sanitization import escape_attribute, escape_html, sanitize_html

BUSINESS_FILENAME = "index.html"
HERO_IMAGE_SIZE = (1600, 900)
ABOUT_IMAGE_SIZE = (800, 600)


def primary_cta(contact: ContactInfo) -> str:
    """WhatsApp link if a WhatsApp or phone number exists, else tel:, else the contact section"""
    return contact.whatsapp_href() or contact.tel_href() or "#contact"


def _image_directive(keywords: Optional[str], size, alt: str) -> str:
    if not keywords or not keywords.strip():
        return ""
    width, height = size
    src = f"https://source.unsplash.com/{width}x{height}/?{quote(keywords.strip(), safe=',')}"
    alt_text = escape_attribute(alt)
    return f'<img src="{src}" alt="{alt_text}" width="{width}" height="{height}">'


def _paragraphs(text: str) -> str:
    blocks = [block.strip() for block in text.split("\n\n") if block.strip()]
    return "\n".join(f"<p>{sanitize_html(block)}</p>" for block in blocks)


def _cta_link(href: str, label: str, css_class: str = "btn btn-primary") -> str:
    extra = ' target="_blank" rel="noopener noreferrer"' if href.startswith("https://wa.me/") else ""
    return f'<a class="{css_class}" href="{escape_attribute(href)}"{extra}>{escape_html(label)}</a>'


def _default_cta_label(href: str) -> str:
    if href.startswith("https://wa.me/"):
        return "Chat on WhatsApp"
    if href.startswith("tel:"):
        return "Call Us"
    return "Get in Touch"


def render_business_page(content: PageContent, contact: ContactInfo, brand_override: Optional[str] = None) -> PageDocument:
    """
    Render structured content into the single business page.

    Args:
        content: Decoded section content
        contact: Extracted contact info (single source of truth for links)
        brand_override: Business name from the description; wins over the model's name

    Returns:
        PageDocument for index.html in DRAFT state
    """
    brand = brand_override or content.business_name or DEFAULT_BRAND
    cta_href = primary_cta(contact)
    parts: List[str] = []

    parts.append(
        '<header class="site-header">\n'
        f'<a class="logo" href="#top">{escape_html(brand)}</a>\n'
        '<nav class="site-nav" aria-label="Main navigation">\n'
        '<button class="nav-toggle" type="button" aria-label="Toggle menu" aria-expanded="false">☰</button>\n'
        '<ul class="nav-links">'
        '<li><a href="#about">About</a></li>'
        '<li><a href="#services">Services</a></li>'
        '<li><a href="#contact">Contact</a></li>'
        '</ul>\n</nav>\n</header>'
    )
    parts.append('<main id="top">')

    hero = content.section("hero")
    hero_label = hero.cta_text or _default_cta_label(cta_href)
    hero_html = ['<section class="hero" id="hero">', '<div class="hero-content">',
                 f"<h1>{escape_html(hero.headline)}</h1>"]
    if hero.subheadline:
        hero_html.append(f'<p class="hero-subheadline">{escape_html(hero.subheadline)}</p>')
    hero_html.append(_cta_link(cta_href, hero_label))
    hero_html.append("</div>")
    hero_image = _image_directive(hero.image_keywords, HERO_IMAGE_SIZE, hero.headline)
    if hero_image:
        hero_html.append(f'<div class="hero-media">{hero_image}</div>')
    hero_html.append("</section>")
    parts.append("\n".join(hero_html))

    about = content.section("about")
    about_image = _image_directive(about.image_keywords, ABOUT_IMAGE_SIZE, about.heading)
    parts.append(
        '<section class="about" id="about">\n'
        f"<h2>{escape_html(about.heading)}</h2>\n"
        '<div class="about-grid">\n'
        f'<div class="about-text">{_paragraphs(about.body)}</div>\n'
        + (f'<div class="about-media">{about_image}</div>\n' if about_image else "")
        + "</div>\n</section>"
    )

    services = content.section("services")
    cards = "\n".join(
        f'<article class="card service-card"><h3>{escape_html(item.name)}</h3>'
        f"<p>{escape_html(item.description)}</p></article>"
        for item in services.items
    )
    parts.append(
        '<section class="services" id="services">\n'
        f"<h2>{escape_html(services.heading)}</h2>\n"
        f'<div class="grid services-grid">\n{cards}\n</div>\n</section>'
    )

    testimonials = content.section("testimonials")
    if testimonials is not None:
        quotes = "\n".join(
            f'<blockquote class="card testimonial"><p>{escape_html(item.quote)}</p>'
            + (f"<cite>{escape_html(item.author)}</cite>" if item.author else "")
            + "</blockquote>"
            for item in testimonials.items
        )
        parts.append(
            '<section class="testimonials" id="testimonials">\n'
            f"<h2>{escape_html(testimonials.heading)}</h2>\n"
            f'<div class="grid testimonials-grid">\n{quotes}\n</div>\n</section>'
        )

    contact_section = content.section("contact")
    contact_html = ['<section class="contact" id="contact">', f"<h2>{escape_html(contact_section.heading)}</h2>"]
    if contact_section.body:
        contact_html.append(_paragraphs(contact_section.body))
    if not contact.is_empty():
        contact_html.append(render_contact_block(contact))
    contact_html.append(_cta_link(cta_href, _default_cta_label(cta_href)))
    contact_html.append("</section>")
    parts.append("\n".join(contact_html))

    parts.append("</main>")
    tagline = f"<p>{escape_html(content.tagline)}</p>" if content.tagline else ""
    parts.append(
        '<footer class="site-footer">\n'
        f"{tagline}<p>&copy; {escape_html(brand)}. All rights reserved.</p>\n"
        "</footer>"
    )

    title = f"{brand} – {hero.headline}"
    return new_page(0, BUSINESS_FILENAME, "\n".join(parts), title=escape_html(title))
