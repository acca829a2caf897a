"""
Heuristic rule tables
Category detection, design guides and call-to-action vocabulary
"""

import re
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple


@dataclass(frozen=True)
class DesignGuide:
    """Reference structure injected into planning and page prompts"""
    category: str
    label: str
    tone: str
    sections: Tuple[str, ...]
    default_pages: int


DESIGN_GUIDES = {
    "portfolio": DesignGuide(
        category="portfolio",
        label="Personal portfolio",
        tone="Confident, personal, visual-first. Let the work speak; short copy, large imagery.",
        sections=("hero with name and role", "featured projects grid", "skills", "about / bio", "testimonials", "contact"),
        default_pages=4,
    ),
    "ecommerce": DesignGuide(
        category="ecommerce",
        label="Small online shop",
        tone="Warm, trustworthy, product-focused. Every product card ends with an order action.",
        sections=("hero with offer", "featured products", "categories", "why buy from us", "delivery & payment", "contact / order"),
        default_pages=2,
    ),
    "blog": DesignGuide(
        category="blog",
        label="Blog",
        tone="Editorial and readable. Generous line-height, clear post hierarchy.",
        sections=("hero with blog tagline", "latest posts list", "featured article", "about the author", "newsletter", "contact"),
        default_pages=3,
    ),
    "business": DesignGuide(
        category="business",
        label="Business landing",
        tone="Professional, clear and benefit-driven. Real business-quality copy, no lorem ipsum.",
        sections=("hero with value proposition", "about", "services", "why choose us", "testimonials", "contact"),
        default_pages=3,
    ),
}

DEFAULT_CATEGORY = "business"

# Ordered keyword -> category table; first match wins
CATEGORY_RULES: Sequence[Tuple[str, Tuple[str, ...]]] = (
    ("portfolio", ("portfolio", "photographer", "photography", "designer", "illustrator", "artist", "freelancer", "resume", "cv")),
    ("ecommerce", ("e-commerce", "ecommerce", "online store", "online shop", "shop", "store", "products", "boutique", "sell")),
    ("blog", ("blog", "articles", "journal", "magazine", "posts", "newsletter")),
)


def _keyword_pattern(keyword: str) -> re.Pattern:
    return re.compile(r"\b" + re.escape(keyword) + r"\b", re.IGNORECASE)


def detect_category(description: str) -> str:
    """
    Detect site category from the description

    Args:
        description: Raw site description

    Returns:
        Category key present in DESIGN_GUIDES
    """
    for category, keywords in CATEGORY_RULES:
        if any(_keyword_pattern(kw).search(description or "") for kw in keywords):
            return category
    return DEFAULT_CATEGORY


def design_guide_for(description: str) -> DesignGuide:
    return DESIGN_GUIDES[detect_category(description)]


# Ordered keyword -> CTA intent table, matched against visible element text
CTA_VOCABULARY: Sequence[Tuple[str, str]] = (
    ("whatsapp", "whatsapp"),
    ("call", "phone"),
    ("phone", "phone"),
    ("ring", "phone"),
    ("email", "email"),
    ("e-mail", "email"),
    ("order", "purchase"),
    ("buy", "purchase"),
    ("shop now", "purchase"),
    ("add to cart", "purchase"),
    ("purchase", "purchase"),
    ("book", "booking"),
    ("reserve", "booking"),
    ("schedule", "booking"),
    ("appointment", "booking"),
    ("donate", "donation"),
    ("contact", "contact"),
    ("get in touch", "contact"),
    ("enquire", "contact"),
    ("inquire", "contact"),
    ("get a quote", "contact"),
    ("request a quote", "contact"),
    ("hire", "contact"),
    ("message", "contact"),
    ("talk to", "contact"),
    ("get started", "contact"),
)

# Class-name fragments that mark an element as button-like
BUTTON_CLASS_MARKERS: Tuple[str, ...] = ("btn", "button", "cta")

# Targets that navigate nowhere
PLACEHOLDER_TARGETS: Tuple[str, ...] = ("", "#", "#!", "javascript:void(0)", "javascript:void(0);", "javascript:;", "javascript:")

_CTA_PATTERNS = tuple((_keyword_pattern(keyword), intent) for keyword, intent in CTA_VOCABULARY)


def classify_cta_text(text: str) -> Optional[str]:
    """
    Classify visible element text as a call-to-action intent

    Args:
        text: Visible text of an anchor or button

    Returns:
        Intent name (e.g. "purchase", "contact") or None when the text is not a CTA
    """
    if not text:
        return None
    for pattern, intent in _CTA_PATTERNS:
        if pattern.search(text):
            return intent
    return None


def has_button_marker(classes: Sequence[str]) -> bool:
    """True when any class name carries a button-like marker (btn, button, cta)"""
    for name in classes or ():
        lowered = name.lower()
        if any(marker in lowered for marker in BUTTON_CLASS_MARKERS):
            return True
    return False


def is_placeholder_target(href: Optional[str]) -> bool:
    if href is None:
        return True
    return href.strip().lower().replace(" ", "") in PLACEHOLDER_TARGETS
