"""HTML sanitization for model-authored copy and user-supplied values"""

import bleach

# Inline markup model copy may keep; block structure comes from the renderer
INLINE_TAGS = ["a", "strong", "em", "b", "i", "br"]
INLINE_ATTRIBUTES = {
    "a": ["href", "rel", "target"]
}
LINK_PROTOCOLS = ["http", "https", "mailto", "tel"]


def sanitize_html(text: str) -> str:
    """
    Sanitize inline HTML in model-authored copy.

    Disallowed tags are stripped, not escaped; links keep only web, mail and phone protocols.
    """
    return bleach.clean(
        text or "",
        tags=INLINE_TAGS,
        attributes=INLINE_ATTRIBUTES,
        protocols=LINK_PROTOCOLS,
        strip=True,
    )


def escape_html(text: str) -> str:
    """Escape HTML entities"""
    return bleach.clean(text or "", tags=[], attributes={})


def escape_attribute(text: str) -> str:
    """Escape a value for a double-quoted attribute"""
    return escape_html(text).replace('"', "&quot;")
