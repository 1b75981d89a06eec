from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from fritter.core.auth import get_current_user
from fritter.core.db import get_db
from fritter.models.freet import FreetType
from fritter.models.user import User
from fritter.schemas.freet import (
    FreetCreateIn, FreetUpdateIn, ArchiveIn, FreetOut, FreetMessageOut, MessageOut
)
from fritter.services import freets as freet_service
from fritter.services import lifecycle, policy
from fritter.services.projector import to_freet_out, to_merchant_freet_out

router = APIRouter(prefix="/api/posts", tags=["freets"])


# ---------- 1) all freets, or one author's ----------
@router.get("", response_model=List[FreetOut])
def list_freets(
    author: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    if author is not None:
        user = policy.author_exists(db, author)
        rows = freet_service.find_all_by_author(db, user)
    else:
        rows = freet_service.find_all(db)
    return [to_freet_out(f) for f in rows]


# ---------- 2) feed: freets that have not expired ----------
@router.get("/feed", response_model=List[FreetOut])
def feed(db: Session = Depends(get_db)):
    rows = freet_service.find_feed(db, lifecycle.utcnow())
    return [to_freet_out(f) for f in rows]


# ---------- 3) archive: my expired freets ----------
@router.get("/archived", response_model=List[FreetOut])
def archived(
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    rows = freet_service.find_archived(db, me, lifecycle.utcnow())
    return [to_freet_out(f) for f in rows]


# ---------- 4) one freet ----------
@router.get("/{freet_id}", response_model=FreetOut)
def get_freet(freet_id: str, db: Session = Depends(get_db)):
    return to_freet_out(policy.freet_exists(db, freet_id))


# ---------- 5) create (default / fleeting / merchant) ----------
@router.post("", response_model=FreetMessageOut, status_code=status.HTTP_201_CREATED)
def create_freet(
    body: FreetCreateIn,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    now = lifecycle.utcnow()
    content = policy.valid_content(body.content)
    freet_type = policy.valid_freet_type(body.type_freet)

    if freet_type == FreetType.DEFAULT:
        freet = freet_service.create_freet(db, me.id, content, freet_type, now)
        return FreetMessageOut(message="Your freet was created successfully.", freet=to_freet_out(freet))

    if freet_type == FreetType.FLEETING:
        expiration = policy.valid_future_expiration(body.expiration, now)
        freet = freet_service.create_freet(db, me.id, content, freet_type, now, expiration=expiration)
        return FreetMessageOut(message="Your fleeting freet was created successfully.", freet=to_freet_out(freet))

    # merchant: every check runs before anything is written
    expiration = None
    if body.expiration is not None:
        expiration = policy.valid_future_expiration(body.expiration, now)
    name = policy.valid_listing_name(body.listing_name)
    price = policy.valid_price(body.listing_price)
    payment = policy.has_payment_connected(db, me.id)

    freet = freet_service.create_merchant_freet(
        db,
        me.id,
        content,
        now,
        listing_name=name,
        listing_price=price,
        listing_location=(body.listing_location or "").strip() or None,
        payment=payment,
        expiration=expiration,
    )
    return FreetMessageOut(
        message="Your merchant freet was created successfully.",
        freet=to_freet_out(freet),
        merchant_freet=to_merchant_freet_out(freet.merchant_freet),
    )


# ---------- 6) archive / unarchive ----------
@router.patch("/archived/{freet_id}", response_model=FreetMessageOut)
def toggle_archive(
    freet_id: str,
    body: ArchiveIn,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    freet = policy.freet_exists(db, freet_id)
    policy.is_freet_modifier(freet, me.id)

    now = lifecycle.utcnow()
    if body.archive_status == "archive":
        policy.can_archive(freet, now)
        freet = freet_service.set_archived(db, freet, True, now)
        msg = "Your freet has been archived successfully"
    else:
        policy.can_unarchive(freet, now)
        freet = freet_service.set_archived(db, freet, False, now)
        msg = "Your freet has been unarchived successfully"
    return FreetMessageOut(message=msg, freet=to_freet_out(freet))


# ---------- 7) edit ----------
@router.patch("/{freet_id}", response_model=FreetMessageOut)
def update_freet(
    freet_id: str,
    body: FreetUpdateIn,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    freet = policy.freet_exists(db, freet_id)
    policy.is_freet_modifier(freet, me.id)
    content = policy.valid_content(body.content)

    now = lifecycle.utcnow()
    expiration = None
    # only fleeting freets take a new expiration here
    if freet.freet_type == FreetType.FLEETING.value and body.expiration is not None:
        expiration = policy.valid_future_expiration(body.expiration, now)

    freet = freet_service.update_content(db, freet, content, now, expiration=expiration)
    return FreetMessageOut(message="Your freet was updated successfully.", freet=to_freet_out(freet))


# ---------- 8) delete ----------
@router.delete("/{freet_id}", response_model=MessageOut)
def delete_freet(
    freet_id: str,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    freet = policy.freet_exists(db, freet_id)
    policy.is_freet_modifier(freet, me.id)
    freet_service.delete_freet(db, freet)
    return MessageOut(message="Your freet was deleted successfully.")
