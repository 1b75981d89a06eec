# fritter/services/lifecycle.py
"""State transitions for freets and their listings.

Functions here only read and write attributes of ORM instances. They never
touch a session, so the caller decides when a transition becomes durable
(one ``commit`` per request). ``now`` is always passed in explicitly as a
naive UTC datetime.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fritter.core.errors import PreconditionFailed, ValidationFailed
from fritter.models.freet import Freet, FreetType, FAR_FUTURE
from fritter.models.fritter_pay import FritterPay
from fritter.models.merchant_freet import MerchantFreet, ListingStatus

logger = logging.getLogger(__name__)

# listing status -> statuses it may move to
LISTING_TRANSITIONS = {
    ListingStatus.FORSALE: {ListingStatus.SOLD, ListingStatus.DEACTIVATED},
    ListingStatus.SOLD: set(),
    ListingStatus.DEACTIVATED: set(),
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


# ---------- construction ----------
def new_listing(name: str, price: int, location: Optional[str], payment: FritterPay) -> MerchantFreet:
    """Build a for-sale listing whose payment fields are a copy of ``payment``."""
    return MerchantFreet(
        listing_status=ListingStatus.FORSALE.value,
        listing_name=name,
        listing_price=price,
        listing_location=location or "none",
        payment_username=payment.payment_username,
        payment_type=payment.payment_type,
        buyer=None,
    )


def new_freet(
    author_id: int,
    content: str,
    freet_type: FreetType,
    now: datetime,
    expiration: Optional[datetime] = None,
    listing: Optional[MerchantFreet] = None,
) -> Freet:
    """Build a complete freet of the given variant.

    A merchant freet must come with its listing and no other variant may
    carry one, so a freet is never visible without the data its type needs.
    """
    freet_type = FreetType(freet_type)
    if freet_type == FreetType.MERCHANT and listing is None:
        raise ValueError("merchant freets require a listing")
    if freet_type != FreetType.MERCHANT and listing is not None:
        raise ValueError(f"{freet_type.value} freets cannot carry a listing")

    freet = Freet(
        author_id=author_id,
        content=content,
        freet_type=freet_type.value,
        edited=False,
        date_created=now,
        date_modified=now,
        expiration=to_naive_utc(expiration) if expiration else FAR_FUTURE,
    )
    if listing is not None:
        freet.merchant_freet = listing
    return freet


# ---------- freet edits ----------
def set_expiration(freet: Freet, expiration: datetime, now: datetime) -> Freet:
    """Overwrite the expiration. Never changes the freet type."""
    freet.expiration = to_naive_utc(expiration)
    freet.date_modified = now
    return freet


def edit_content(freet: Freet, content: str, now: datetime) -> Freet:
    freet.content = content
    freet.edited = True
    freet.date_modified = now
    return freet


def archive(freet: Freet, now: datetime) -> Freet:
    """Expire a freet as of yesterday; a default freet becomes fleeting."""
    freet.expiration = now - timedelta(days=1)
    freet.date_modified = now
    if freet.freet_type == FreetType.DEFAULT.value:
        freet.freet_type = FreetType.FLEETING.value
    logger.info("freet %s archived (type=%s)", freet.id, freet.freet_type)
    return freet


def unarchive(freet: Freet, now: datetime) -> Freet:
    """Make a freet never expire again; a fleeting freet becomes default."""
    freet.expiration = FAR_FUTURE
    freet.date_modified = now
    if freet.freet_type == FreetType.FLEETING.value:
        freet.freet_type = FreetType.DEFAULT.value
    logger.info("freet %s unarchived (type=%s)", freet.id, freet.freet_type)
    return freet


def is_expired(freet: Freet, now: datetime) -> bool:
    return freet.expiration <= now


def is_not_expired(freet: Freet, now: datetime) -> bool:
    return freet.expiration > now


# ---------- listings ----------
def listing_is_for_sale(listing: MerchantFreet) -> bool:
    return listing.listing_status == ListingStatus.FORSALE.value


def listing_is_sold(listing: MerchantFreet) -> bool:
    return listing.listing_status == ListingStatus.SOLD.value


def _touch_parent(listing: MerchantFreet, now: datetime) -> None:
    if listing.freet is not None:
        listing.freet.date_modified = now


def set_listing_status(
    listing: MerchantFreet,
    status: ListingStatus,
    now: datetime,
    buyer: Optional[str] = None,
) -> MerchantFreet:
    """Move a listing to ``status``; selling records ``buyer``.

    Any status change counts as activity on the parent freet.
    """
    status = ListingStatus(status)
    current = ListingStatus(listing.listing_status)
    if status not in LISTING_TRANSITIONS[current]:
        raise PreconditionFailed(f"Listing is {current.value} and cannot become {status.value}.")
    if status == ListingStatus.SOLD and not buyer:
        raise ValueError("selling a listing requires a buyer")

    listing.listing_status = status.value
    if status == ListingStatus.SOLD:
        listing.buyer = buyer
    _touch_parent(listing, now)
    return listing


def edit_listing_field(listing: MerchantFreet, field: str, value, now: datetime) -> MerchantFreet:
    """Update one listing field; ``value`` has already passed its policy check."""
    if field == "listingName":
        listing.listing_name = value
    elif field == "listingPrice":
        listing.listing_price = int(value)
    elif field == "listingLocation":
        listing.listing_location = value or "none"
    elif field == "expiration":
        listing.freet.expiration = to_naive_utc(value)
    elif field == "listingStatus":
        if ListingStatus(value) == ListingStatus.SOLD:
            raise ValidationFailed("A listing can only be sold through a purchase.")
        return set_listing_status(listing, value, now)
    else:
        raise ValidationFailed(f"Unknown listing field {field}.")

    _touch_parent(listing, now)
    return listing
