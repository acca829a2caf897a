"""API request/response schemas"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

MIN_PAGES = 1
MAX_PAGES = 5


class GenerationRequest(BaseModel):
    """POST /generate-code request"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    description: str = Field(..., description="Natural-language site description, may carry 'Label: value' contact lines")
    page_count: Optional[int] = Field(
        default=None,
        alias="pageCount",
        ge=MIN_PAGES,
        le=MAX_PAGES,
        description="Number of pages; inferred from the description when omitted",
    )

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("description must not be empty")
        return value


class BusinessSiteRequest(BaseModel):
    """POST /generate-business-site request"""
    model_config = ConfigDict(frozen=True)

    description: str

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("description must not be empty")
        return value


class SiteBundle(BaseModel):
    """Final artifact: filenames, per-page HTML in the same order, shared CSS and JS"""
    model_config = ConfigDict(frozen=True)

    pages: List[str]
    html: List[str]
    css: str
    js: str

    @model_validator(mode="after")
    def pages_match_html(self) -> "SiteBundle":
        if len(self.pages) != len(self.html):
            raise ValueError(
                f"pages/html length mismatch: {len(self.pages)} filenames vs {len(self.html)} documents"
            )
        return self


class ErrorResponse(BaseModel):
    """Error response"""
    error_id: str
    code: str
    message: str
    hint: Optional[str] = None
    retryable: bool = False
