"""Pydantic schemas for listings.

Learn: Prices cross the wire as decimal major units ("2500.00") and are
stored as integer cents (250000). Requests carry `price`; the ORM row
carries `price_cents`; ListingRead converts back with a computed field.

ListingUpdate is a PATCH in disguise: the service only looks at the
fields the client actually sent (model_fields_set), so an omitted field
keeps its value while an explicit null clears an optional one.
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, computed_field, field_validator

from homelist.services.pricing import from_cents


# Column limits from db/models.py; longer input is a 400, not a driver error
MAX_INT = 2**31 - 1


# ─── Requests ───────────────────────────────────────────

class ListingCreate(BaseModel):
    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    price: Optional[Decimal] = None
    location: Optional[str] = Field(None, max_length=255)
    type: Optional[str] = Field(None, max_length=50)
    bedrooms: Optional[int] = Field(None, ge=0, le=MAX_INT)
    bathrooms: Optional[int] = Field(None, ge=0, le=MAX_INT)
    area: Optional[int] = Field(None, ge=0, le=MAX_INT)
    images: Optional[list[str]] = None

    @field_validator("bedrooms", "bathrooms", "area", mode="before")
    @classmethod
    def blank_is_none(cls, value):
        """The listing form sends "" for a number left empty."""
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ListingUpdate(ListingCreate):
    """Same fields as create; presence decides what changes."""


# ─── Responses ──────────────────────────────────────────

class AuthorSummary(BaseModel):
    id: uuid.UUID
    name: str
    email: str

    model_config = {"from_attributes": True}


class AuthorContact(AuthorSummary):
    """Author with phone: only on the single-listing page."""
    phone: Optional[str] = None


class ListingRead(BaseModel):
    id: uuid.UUID
    author_id: uuid.UUID
    title: str
    description: str
    price_cents: int = Field(exclude=True)
    location: str
    type: str
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    area: Optional[int] = None
    images: list[str] = []
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def price(self) -> Decimal:
        return from_cents(self.price_cents)


class ListingWithAuthor(ListingRead):
    author: AuthorSummary


class ListingDetail(ListingRead):
    author: AuthorContact


class ListingResponse(BaseModel):
    message: str
    listing: ListingWithAuthor
