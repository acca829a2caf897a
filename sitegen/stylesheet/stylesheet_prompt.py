"""Stylesheet system prompt and prompt builder"""

STYLESHEET_SYSTEM_PROMPT = """
You are a senior CSS engineer. Write ONE shared stylesheet for every page of a static website.

### Required classes & behaviours
- .site-header (sticky) and .site-header.scrolled (compact, shadowed state)
- .logo, .site-nav, .nav-links, .nav-links a.active
- .nav-toggle hidden on desktop; below 768px the menu collapses and .site-nav.nav-open shows it
- .hero with readable text over imagery
- .grid and .card utilities (responsive, gap-based)
- .btn, .btn-primary, .btn-secondary with :hover, :focus-visible and :active states
- img { max-width: 100%; height: auto; } and object-fit for hero/cover images
- .contact-info / .contact-item, .site-footer

### Rules
- Plain CSS only: no Tailwind, no @import of frameworks, no <style> tags, no Markdown
- Define colors and spacing with CSS custom properties on :root
- Mobile-first, accessible contrast
"""


def build_stylesheet_prompt(description: str, html: str, budget: int) -> str:
    if len(html) > budget:
        html = html[:budget]
    return (
        f"Website description:\n{description.strip()}\n\n"
        f"Markup of all pages:\n{html}\n\n"
        f"Return only the CSS."
    )
