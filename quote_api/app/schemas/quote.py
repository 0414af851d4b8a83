"""
Pydantic models for quote data.

``QuoteBase`` holds the fields shared by requests and responses;
``QuoteCreate`` is the body of ``POST``, ``QuoteUpdate`` the body of
``PUT`` (only supplied fields are applied) and ``QuoteRead`` the
response shape, built directly from ``Quote`` objects.

The title is optional at the schema level on purpose: a missing or
blank title is rejected by ``QuoteService.validate_entity`` so that
all validation failures surface the same way.
"""

from datetime import datetime
from typing import Iterable, List, Optional

from pydantic import BaseModel, Field, field_validator

from quote_api.app.models.quote import QuoteStatus, normalize_tags


class QuoteBase(BaseModel):
    title: Optional[str] = Field(None, description="Quote title, 1 to 100 characters")
    description: Optional[str] = Field(None, description="The quotation text or a note about it")
    category: Optional[str] = Field(None, description="Free‑text category, e.g. 'Philosophy'")
    status: QuoteStatus = Field(QuoteStatus.ACTIVE, description="ACTIVE, INACTIVE or ARCHIVED")
    tags: List[str] = Field(default_factory=list, description="Tags; stored lower‑cased and trimmed")
    author: Optional[str] = None
    source: Optional[str] = None
    publisher: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, v):
        if v is None or isinstance(v, QuoteStatus):
            return v
        return QuoteStatus.parse(v)

    @field_validator("tags", mode="before")
    @classmethod
    def sort_tags(cls, v):
        if v is None:
            return []
        return sorted(normalize_tags(v))


class QuoteCreate(QuoteBase):
    """Schema for creating a quote."""
    pass


class QuoteUpdate(BaseModel):
    """Schema for updating a quote.

    All fields are optional; only fields present in the request body
    are applied to the stored quote.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    status: Optional[QuoteStatus] = None
    tags: Optional[List[str]] = None
    author: Optional[str] = None
    source: Optional[str] = None
    publisher: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, v):
        if v is None or isinstance(v, QuoteStatus):
            return v
        return QuoteStatus.parse(v)


class QuoteRead(QuoteBase):
    """Schema for reading a quote from the API."""

    id: int
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True,
    }


class ArchiveResult(BaseModel):
    """Number of quotes moved from INACTIVE to ARCHIVED."""

    archived: int


def to_read_list(quotes: Iterable) -> List[QuoteRead]:
    """Convert domain quotes to response models."""
    return [QuoteRead.model_validate(quote) for quote in quotes]
