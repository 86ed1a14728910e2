"""Listing service — CRUD over listings, gated by the ownership guard.

Learn: Every mutation follows the same shape:
1. load the row (404 if it isn't there)
2. ask the ownership guard (401/403 if it says no)
3. apply the change and commit once

Reads are split by audience. The public paths (list_active, get_active)
only ever see active listings: even the owner can't open an inactive
one by id. list_mine shows the owner everything they have.
"""

import uuid
from typing import Any, Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from homelist.auth.ownership import Action, enforce
from homelist.db.models import Listing, User
from homelist.errors import AuthenticationError, NotFoundError, ValidationError
from homelist.services.pricing import to_cents

logger = structlog.get_logger()

REQUIRED_FIELDS = ("title", "description", "price", "location", "type")
OPTIONAL_INT_FIELDS = ("bedrooms", "bathrooms", "area")


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _parse_id(listing_id: Any) -> uuid.UUID:
    """Listing ids that aren't UUIDs can't exist: treat them as not found."""
    if isinstance(listing_id, uuid.UUID):
        return listing_id
    try:
        return uuid.UUID(str(listing_id))
    except ValueError:
        raise NotFoundError("Listing not found")


class ListingService:
    """Business logic for listing CRUD and ownership."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Create ─────────────────────────────────────────

    async def create(self, actor_id: Optional[uuid.UUID], data: dict) -> Listing:
        """Create a listing owned by the actor.

        Learn: The owner comes from the token, never from the body:
        an author_id in the request is simply not a field we read.
        """
        if actor_id is None:
            raise AuthenticationError()
        if any(_is_missing(data.get(field)) for field in REQUIRED_FIELDS):
            raise ValidationError(
                "Title, description, price, location, and type are required"
            )

        author = await self.db.get(User, actor_id)
        if author is None:
            # Token signed by us for an account that no longer resolves
            raise AuthenticationError()

        listing = Listing(
            author=author,
            title=data["title"].strip(),
            description=data["description"],
            price_cents=to_cents(data["price"]),
            location=data["location"].strip(),
            type=data["type"].strip(),
            bedrooms=data.get("bedrooms"),
            bathrooms=data.get("bathrooms"),
            area=data.get("area"),
            images=list(data.get("images") or []),
        )
        self.db.add(listing)
        await self.db.commit()

        logger.info(
            "listing.created",
            listing_id=str(listing.id),
            author_id=str(actor_id),
            price_cents=listing.price_cents,
        )
        return listing

    # ─── Read ───────────────────────────────────────────

    async def list_active(self) -> list[Listing]:
        """All active listings with their authors, newest first."""
        result = await self.db.execute(
            select(Listing)
            .where(Listing.is_active.is_(True))
            .options(selectinload(Listing.author))
            .order_by(Listing.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_active(self, listing_id: Any) -> Listing:
        """One active listing with its author. Inactive is the same as missing."""
        result = await self.db.execute(
            select(Listing)
            .where(Listing.id == _parse_id(listing_id), Listing.is_active.is_(True))
            .options(selectinload(Listing.author))
        )
        listing = result.scalars().first()
        if listing is None:
            raise NotFoundError("Listing not found")
        return listing

    async def list_mine(self, actor_id: uuid.UUID) -> list[Listing]:
        """Every listing the actor owns, active or not, newest first."""
        result = await self.db.execute(
            select(Listing)
            .where(Listing.author_id == actor_id)
            .order_by(Listing.created_at.desc())
        )
        return list(result.scalars().all())

    # ─── Update / delete ────────────────────────────────

    async def update(
        self, actor_id: Optional[uuid.UUID], listing_id: Any, changes: dict
    ) -> Listing:
        """Apply the fields present in changes; everything else is kept.

        Learn: Presence is what counts, not truthiness. {"bedrooms": null}
        clears bedrooms; leaving "bedrooms" out keeps it. Required fields
        can't be cleared: sending one empty is a 400. Price is only
        re-normalized when a new price is sent.
        """
        listing = await self._load(listing_id)
        enforce(Action.UPDATE, listing, actor_id)

        for field in REQUIRED_FIELDS:
            if field in changes and _is_missing(changes[field]):
                raise ValidationError(f"{field.capitalize()} cannot be empty")
        if "price" in changes:
            listing.price_cents = to_cents(changes["price"])

        if "title" in changes:
            listing.title = changes["title"].strip()
        if "description" in changes:
            listing.description = changes["description"]
        if "location" in changes:
            listing.location = changes["location"].strip()
        if "type" in changes:
            listing.type = changes["type"].strip()
        for field in OPTIONAL_INT_FIELDS:
            if field in changes:
                setattr(listing, field, changes[field])
        if "images" in changes:
            listing.images = list(changes["images"] or [])

        await self.db.commit()

        logger.info(
            "listing.updated",
            listing_id=str(listing.id),
            fields=sorted(changes),
        )
        return listing

    async def delete(self, actor_id: Optional[uuid.UUID], listing_id: Any) -> None:
        """Hard-delete a listing. A second delete of the same id is a 404."""
        listing = await self._load(listing_id)
        enforce(Action.DELETE, listing, actor_id)

        deleted_id = listing.id
        await self.db.delete(listing)
        await self.db.commit()

        logger.info("listing.deleted", listing_id=str(deleted_id), author_id=str(actor_id))

    # ─── Helpers ────────────────────────────────────────

    async def _load(self, listing_id: Any) -> Listing:
        """Any listing by id, active or not, with its author loaded."""
        result = await self.db.execute(
            select(Listing)
            .where(Listing.id == _parse_id(listing_id))
            .options(selectinload(Listing.author))
        )
        listing = result.scalars().first()
        if listing is None:
            raise NotFoundError("Listing not found")
        return listing
