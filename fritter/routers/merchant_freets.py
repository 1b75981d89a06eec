from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from fritter.core.auth import get_current_user
from fritter.core.db import get_db
from fritter.models.user import User
from fritter.schemas.freet import FreetOut, ListingFieldIn, MerchantFreetMessageOut
from fritter.services import freets as freet_service
from fritter.services import lifecycle, policy
from fritter.services.projector import to_freet_out, to_merchant_freet_out

router = APIRouter(prefix="/api/posts/listings", tags=["merchant freets"])


# ---------- 1) merchant freets, by author and/or status ----------
@router.get("", response_model=List[FreetOut])
def list_merchant_freets(
    author: Optional[str] = Query(None),
    listing_status: Optional[str] = Query(None, alias="listingStatus", pattern="^(all|forsale|sold|deactivated)$"),
    db: Session = Depends(get_db),
):
    user = policy.author_exists(db, author) if author is not None else None

    if listing_status and listing_status != "all":
        rows = freet_service.find_merchant_by_status(db, listing_status, author=user)
    else:
        rows = freet_service.find_all_merchant(db, author=user)
    return [to_freet_out(f) for f in rows]


# ---------- 2) buy ----------
@router.patch("/purchase/{freet_id}", response_model=MerchantFreetMessageOut)
def purchase(
    freet_id: str,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    freet = policy.freet_exists(db, freet_id)
    listing = policy.listing_for_freet(freet)
    # self-purchase is refused whatever the listing status
    policy.is_valid_buyer(freet, me.id)
    policy.has_payment_connected(db, me.id)
    policy.listing_is_for_sale(listing)

    listing = freet_service.purchase(db, listing, me, lifecycle.utcnow())
    return MerchantFreetMessageOut(
        message="merchantFreet was successfully purchased",
        merchant_freet=to_merchant_freet_out(listing),
    )


# ---------- 3) edit one listing field ----------
@router.patch("/{listing_id}", response_model=MerchantFreetMessageOut)
def update_listing(
    listing_id: str,
    body: ListingFieldIn,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    listing = policy.listing_exists(db, listing_id)
    policy.is_listing_modifier(listing, me.id)

    now = lifecycle.utcnow()
    value = policy.valid_listing_field(body.field, body.value, now)
    listing = freet_service.update_listing_field(db, listing, body.field, value, now)
    return MerchantFreetMessageOut(
        message="Your merchant freet was updated successfully.",
        merchant_freet=to_merchant_freet_out(listing),
    )
