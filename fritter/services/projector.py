# fritter/services/projector.py
"""Shape ORM rows into the JSON the client sees.

Author references are always replaced by the author's username and every
timestamp is rendered with ``format_date``.
"""
from datetime import datetime
from typing import Optional

from fritter.models.freet import Freet
from fritter.models.fritter_pay import FritterPay
from fritter.models.merchant_freet import MerchantFreet
from fritter.schemas.freet import FreetOut, MerchantFreetOut
from fritter.schemas.fritter_pay import FritterPayOut


def _ordinal(n: int) -> str:
    if 11 <= n % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def format_date(dt: Optional[datetime]) -> Optional[str]:
    """``October 19th 2026, 4:05:09 pm``"""
    if dt is None:
        return None
    hour = dt.hour % 12 or 12
    meridiem = "am" if dt.hour < 12 else "pm"
    return f"{dt:%B} {_ordinal(dt.day)} {dt.year}, {hour}:{dt:%M:%S} {meridiem}"


def to_merchant_freet_out(listing: MerchantFreet) -> MerchantFreetOut:
    parent = listing.freet
    return MerchantFreetOut(
        id=str(listing.id),
        freet=parent.content,
        author=parent.author.username,
        expiration=format_date(parent.expiration),
        date_modified=format_date(parent.date_modified),
        listing_status=listing.listing_status,
        listing_name=listing.listing_name,
        listing_price=listing.listing_price,
        listing_location=listing.listing_location,
        payment_username=listing.payment_username,
        payment_type=listing.payment_type,
        buyer=listing.buyer,
    )


def to_freet_out(freet: Freet) -> FreetOut:
    listing = freet.merchant_freet
    return FreetOut(
        id=str(freet.id),
        author=freet.author.username,
        content=freet.content,
        date_created=format_date(freet.date_created),
        date_modified=format_date(freet.date_modified),
        expiration=format_date(freet.expiration),
        freet_type=freet.freet_type,
        edited=bool(freet.edited),
        merchant_freet=to_merchant_freet_out(listing) if listing is not None else None,
    )


def to_fritter_pay_out(pay: FritterPay) -> FritterPayOut:
    return FritterPayOut(
        id=str(pay.id),
        user=pay.user.username,
        payment_type=pay.payment_type,
        payment_username=pay.payment_username,
        payment_link=pay.payment_link or "",
    )
