# fritter/services/freets.py
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, desc
from sqlalchemy.orm import Session

from fritter.models.freet import Freet, FreetType
from fritter.models.fritter_pay import FritterPay
from fritter.models.merchant_freet import MerchantFreet, ListingStatus
from fritter.models.user import User
from fritter.services import lifecycle

logger = logging.getLogger(__name__)


def _commit(db: Session, obj):
    db.commit()
    db.refresh(obj)
    return obj


def create_freet(
    db: Session,
    author_id: int,
    content: str,
    freet_type: FreetType,
    now: datetime,
    expiration: Optional[datetime] = None,
) -> Freet:
    freet = lifecycle.new_freet(author_id, content, freet_type, now, expiration=expiration)
    db.add(freet)
    _commit(db, freet)
    logger.info("user %s created %s freet %s", author_id, freet.freet_type, freet.id)
    return freet


def create_merchant_freet(
    db: Session,
    author_id: int,
    content: str,
    now: datetime,
    listing_name: str,
    listing_price: int,
    listing_location: Optional[str],
    payment: FritterPay,
    expiration: Optional[datetime] = None,
) -> Freet:
    """Create the freet and its listing in one commit."""
    listing = lifecycle.new_listing(listing_name, listing_price, listing_location, payment)
    freet = lifecycle.new_freet(
        author_id, content, FreetType.MERCHANT, now, expiration=expiration, listing=listing
    )
    db.add(freet)
    _commit(db, freet)
    logger.info("user %s listed %r at %s (freet %s)", author_id, listing_name, listing_price, freet.id)
    return freet


def _ordered(q):
    return q.order_by(desc(Freet.date_modified), desc(Freet.id))


def find_all(db: Session) -> List[Freet]:
    return list(db.execute(_ordered(select(Freet))).unique().scalars().all())


def find_all_by_author(db: Session, author: User) -> List[Freet]:
    q = select(Freet).where(Freet.author_id == author.id)
    return list(db.execute(_ordered(q)).unique().scalars().all())


def find_all_merchant(db: Session, author: Optional[User] = None) -> List[Freet]:
    q = select(Freet).where(Freet.freet_type == FreetType.MERCHANT.value)
    if author is not None:
        q = q.where(Freet.author_id == author.id)
    return list(db.execute(_ordered(q)).unique().scalars().all())


def find_merchant_by_status(db: Session, status: ListingStatus, author: Optional[User] = None) -> List[Freet]:
    q = (
        select(Freet)
        .join(MerchantFreet, MerchantFreet.freet_id == Freet.id)
        .where(MerchantFreet.listing_status == ListingStatus(status).value)
    )
    if author is not None:
        q = q.where(Freet.author_id == author.id)
    return list(db.execute(_ordered(q)).unique().scalars().all())


def find_feed(db: Session, now: datetime) -> List[Freet]:
    return [f for f in find_all(db) if lifecycle.is_not_expired(f, now)]


def find_archived(db: Session, author: User, now: datetime) -> List[Freet]:
    return [f for f in find_all_by_author(db, author) if lifecycle.is_expired(f, now)]


def update_content(
    db: Session,
    freet: Freet,
    content: str,
    now: datetime,
    expiration: Optional[datetime] = None,
) -> Freet:
    if expiration is not None:
        lifecycle.set_expiration(freet, expiration, now)
    lifecycle.edit_content(freet, content, now)
    return _commit(db, freet)


def set_archived(db: Session, freet: Freet, archived: bool, now: datetime) -> Freet:
    if archived:
        lifecycle.archive(freet, now)
    else:
        lifecycle.unarchive(freet, now)
    return _commit(db, freet)


def purchase(db: Session, listing: MerchantFreet, buyer: User, now: datetime) -> MerchantFreet:
    lifecycle.set_listing_status(listing, ListingStatus.SOLD, now, buyer=buyer.username)
    _commit(db, listing)
    logger.info("listing %s sold to %s", listing.id, buyer.username)
    return listing


def update_listing_field(db: Session, listing: MerchantFreet, field: str, value, now: datetime) -> MerchantFreet:
    lifecycle.edit_listing_field(listing, field, value, now)
    return _commit(db, listing)


def delete_freet(db: Session, freet: Freet) -> int:
    """Delete a freet; its listing goes with it in the same commit."""
    fid = freet.id
    db.delete(freet)
    db.commit()
    logger.info("freet %s deleted", fid)
    return fid

