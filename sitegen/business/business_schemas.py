"""Structured page content schemas for the single-page business site"""
import json
from typing import Annotated, List, Literal, Optional, Union
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from sitegen.base_agent import strip_code_fences

REQUIRED_ORDER = ("hero", "about", "services", "contact")
FULL_ORDER = ("hero", "about", "services", "testimonials", "contact")


class HeroSection(BaseModel):
    type: Literal["hero"]
    headline: str = Field(min_length=1)
    subheadline: Optional[str] = None
    cta_text: Optional[str] = None
    image_keywords: Optional[str] = None


class AboutSection(BaseModel):
    type: Literal["about"]
    heading: str = "About Us"
    body: str = Field(min_length=1)
    image_keywords: Optional[str] = None


class ServiceItem(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""


class ServicesSection(BaseModel):
    type: Literal["services"]
    heading: str = "Our Services"
    items: List[ServiceItem] = Field(min_length=1)


class Testimonial(BaseModel):
    quote: str = Field(min_length=1)
    author: str = ""


class TestimonialsSection(BaseModel):
    type: Literal["testimonials"]
    heading: str = "What Our Customers Say"
    items: List[Testimonial] = Field(min_length=1)


class ContactSection(BaseModel):
    type: Literal["contact"]
    heading: str = "Contact Us"
    body: Optional[str] = None


Section = Annotated[
    Union[HeroSection, AboutSection, ServicesSection, TestimonialsSection, ContactSection],
    Field(discriminator="type"),
]


class PageContent(BaseModel):
    """Ordered sections: hero, about, services, optional testimonials, contact"""
    business_name: Optional[str] = None
    tagline: Optional[str] = None
    sections: List[Section]

    @field_validator("business_name", "tagline")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def check_order(self) -> "PageContent":
        order = tuple(section.type for section in self.sections)
        if order not in (REQUIRED_ORDER, FULL_ORDER):
            raise ValueError(
                f"sections must be {' → '.join(REQUIRED_ORDER)} "
                f"(testimonials optional before contact), got {' → '.join(order) or 'nothing'}"
            )
        return self

    def section(self, section_type: str):
        for section in self.sections:
            if section.type == section_type:
                return section
        return None


class DecodeResult(BaseModel):
    """Outcome of decoding model output: exactly one of content / error is set"""
    content: Optional[PageContent] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.content is not None


def decode_page_content(text: str) -> DecodeResult:
    """
    Decode model output into PageContent.

    Strips code fences, parses JSON and validates the section union and order.
    Never raises; the caller decides how fatal a failure is.
    """
    cleaned = strip_code_fences(text)
    if not cleaned:
        return DecodeResult(error="empty response")
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        return DecodeResult(error=f"invalid JSON: {e}")
    try:
        return DecodeResult(content=PageContent.model_validate(data))
    except ValidationError as e:
        return DecodeResult(error=f"schema validation failed: {e.errors()[0].get('msg', str(e))}")


PAGE_CONTENT_SCHEMA = PageContent.model_json_schema()
