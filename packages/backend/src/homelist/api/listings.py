"""Listing API routes.

Learn: Routes handle HTTP concerns, ListingService handles the rules:
- GET /listings → active listings, newest first (public)
- GET /listings/{id} → one active listing with author contact (public)
- POST /listings → create, caller becomes owner
- PUT /listings/{id} → partial update, owner only
- DELETE /listings/{id} → hard delete, owner only
- GET /listings/mine → caller's listings, active or not

/listings/mine is declared before /listings/{id} so "mine" is never
read as an id.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from homelist.auth.dependencies import CurrentIdentity, get_current_user
from homelist.db.engine import get_db
from homelist.schemas.listing import (
    ListingCreate,
    ListingDetail,
    ListingRead,
    ListingResponse,
    ListingUpdate,
    ListingWithAuthor,
)
from homelist.schemas.user import MessageResponse
from homelist.services.listing_service import ListingService

router = APIRouter(prefix="/listings")


def _svc(db: AsyncSession = Depends(get_db)) -> ListingService:
    return ListingService(db)


# ─── Public reads ────────────────────────────────────────


@router.get("", response_model=list[ListingWithAuthor])
async def list_listings(svc: ListingService = Depends(_svc)):
    return await svc.list_active()


# ─── Owner views ─────────────────────────────────────────


@router.get("/mine", response_model=list[ListingRead])
@router.get("/my-listings", response_model=list[ListingRead], include_in_schema=False)
async def my_listings(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ListingService = Depends(_svc),
):
    """Everything the caller owns, including inactive listings."""
    return await svc.list_mine(identity.user_id)


@router.get("/{listing_id}", response_model=ListingDetail)
async def get_listing(listing_id: str, svc: ListingService = Depends(_svc)):
    return await svc.get_active(listing_id)


# ─── Mutations ───────────────────────────────────────────


@router.post("", response_model=ListingResponse, status_code=201)
async def create_listing(
    body: ListingCreate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ListingService = Depends(_svc),
):
    listing = await svc.create(identity.user_id, body.model_dump())
    return ListingResponse(
        message="Listing created successfully",
        listing=ListingWithAuthor.model_validate(listing),
    )


@router.put("/{listing_id}", response_model=ListingResponse)
async def update_listing(
    listing_id: str,
    body: ListingUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ListingService = Depends(_svc),
):
    """Only fields present in the body change."""
    listing = await svc.update(
        identity.user_id, listing_id, body.model_dump(exclude_unset=True)
    )
    return ListingResponse(
        message="Listing updated successfully",
        listing=ListingWithAuthor.model_validate(listing),
    )


@router.delete("/{listing_id}", response_model=MessageResponse)
async def delete_listing(
    listing_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ListingService = Depends(_svc),
):
    await svc.delete(identity.user_id, listing_id)
    return MessageResponse(message="Listing deleted successfully")
