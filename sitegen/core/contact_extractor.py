"""
Contact & brand extraction

Pure, synchronous scan of the raw description. The extracted values are the
single source of truth for contact data in every later stage and are copied
verbatim into generated output.
"""
import re
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict

from sitegen.models.schemas import MAX_PAGES, MIN_PAGES


class ContactInfo(BaseModel):
    """Contact fields extracted from labelled description lines"""
    model_config = ConfigDict(frozen=True)

    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None

    def is_empty(self) -> bool:
        return not any((self.phone, self.whatsapp, self.email, self.address))

    @property
    def phone_digits(self) -> Optional[str]:
        return digits_only(self.phone)

    @property
    def whatsapp_digits(self) -> Optional[str]:
        """WhatsApp number digits, falling back to the phone number"""
        return digits_only(self.whatsapp) or digits_only(self.phone)

    def tel_href(self) -> Optional[str]:
        digits = self.phone_digits
        return f"tel:{digits}" if digits else None

    def whatsapp_href(self) -> Optional[str]:
        digits = self.whatsapp_digits
        return f"https://wa.me/{digits}" if digits else None

    def mailto_href(self) -> Optional[str]:
        return f"mailto:{self.email}" if self.email else None

    def default_cta_target(self) -> str:
        """
        Single derived target for every placeholder call-to-action in a bundle.

        Precedence: WhatsApp deep link -> phone link -> email link -> in-page contact anchor
        """
        return self.whatsapp_href() or self.tel_href() or self.mailto_href() or "#contact"


_LABELS = {
    "phone": "phone",
    "whatsapp": "whatsapp",
    "email": "email",
    "address": "address",
    "business name": "business_name",
}

# "- Phone: 0700 123 456" / "WhatsApp : +254..." / "* Business Name: Acme"
_LINE_PATTERN = re.compile(
    r"^\s*(?:[-*•]\s*)?(phone|whatsapp|email|address|business name)\s*:\s*(.*?)\s*$",
    re.IGNORECASE,
)

_PAGE_COUNT_PATTERN = re.compile(r"(\d+)\s*[- ]*\s*page(?:s)?\b", re.IGNORECASE)


def digits_only(value: Optional[str]) -> Optional[str]:
    """Strip every non-digit character; None when nothing is left"""
    if not value:
        return None
    digits = re.sub(r"\D", "", value)
    return digits or None


def extract_contact_and_brand(description: str) -> Tuple[ContactInfo, Optional[str]]:
    """
    Scan description for labelled contact lines and an explicit business name.

    The first occurrence of each label wins. Never raises; missing fields are None.

    Args:
        description: Raw site description

    Returns:
        (ContactInfo, business name or None)
    """
    found = {}
    for line in (description or "").splitlines():
        match = _LINE_PATTERN.match(line)
        if not match:
            continue
        key = _LABELS[match.group(1).lower()]
        value = match.group(2)
        if value and key not in found:
            found[key] = value

    brand = found.pop("business_name", None)
    return ContactInfo(**found), brand


def infer_page_count(description: str) -> Optional[int]:
    """
    Infer page count from phrases like "4-page website" or "3 pages".

    Returns:
        Count clamped to the supported range, or None when no phrase is present
    """
    match = _PAGE_COUNT_PATTERN.search(description or "")
    if not match:
        return None
    count = int(match.group(1))
    return min(MAX_PAGES, max(MIN_PAGES, count))
