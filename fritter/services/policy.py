# fritter/services/policy.py
"""Pre-conditions checked before any freet, listing or FritterPay is written.

Each check either returns what it looked up or raises one of the errors in
``fritter.core.errors``. None of them write to the database.
"""
import re
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from fritter.core.config import settings
from fritter.core.errors import Forbidden, NotFound, PreconditionFailed, ValidationFailed
from fritter.models.freet import Freet, FreetType
from fritter.models.fritter_pay import FritterPay
from fritter.models.merchant_freet import MerchantFreet, ListingStatus
from fritter.models.user import User
from fritter.services import lifecycle

USERNAME_RE = re.compile(r"^\w+$")

# largest value a 32-bit INTEGER column holds
MAX_PRICE = 2**31 - 1


def _parse_id(raw: Any) -> Optional[int]:
    try:
        value = int(str(raw))
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


# ---------- existence ----------
def freet_exists(db: Session, freet_id: Any) -> Freet:
    pk = _parse_id(freet_id)
    freet = db.get(Freet, pk) if pk else None
    if not freet:
        raise NotFound({"freetNotFound": f"Freet with freet ID {freet_id} does not exist."})
    return freet


def listing_exists(db: Session, listing_id: Any) -> MerchantFreet:
    pk = _parse_id(listing_id)
    listing = db.get(MerchantFreet, pk) if pk else None
    if not listing:
        raise NotFound({"merchantFreetNotFound": f"Merchant freet with ID {listing_id} does not exist."})
    return listing


def listing_for_freet(freet: Freet) -> MerchantFreet:
    if freet.freet_type != FreetType.MERCHANT.value or freet.merchant_freet is None:
        raise NotFound({"merchantFreetNotFound": f"Freet {freet.id} is not a merchant freet."})
    return freet.merchant_freet


def fritter_pay_exists(db: Session, fritter_pay_id: Any) -> FritterPay:
    pk = _parse_id(fritter_pay_id)
    pay = db.get(FritterPay, pk) if pk else None
    if not pay:
        raise NotFound({"fritterPayNotFound": f"FritterPay with fritterPay ID {fritter_pay_id} does not exist."})
    return pay


def author_exists(db: Session, username: Optional[str]) -> User:
    if not username:
        raise ValidationFailed("Provided author username must be nonempty.")
    user = db.execute(select(User).where(User.username == username)).scalar_one_or_none()
    if not user:
        raise NotFound(f"A user with username {username} does not exist.")
    return user


# ---------- identity ----------
def is_freet_modifier(freet: Freet, user_id: int) -> None:
    if freet.author_id != user_id:
        raise Forbidden("Cannot modify other users' freets.")


def is_listing_modifier(listing: MerchantFreet, user_id: int) -> None:
    if listing.freet.author_id != user_id:
        raise Forbidden("Cannot modify other users' merchant freets.")


def is_payment_modifier(pay: FritterPay, user_id: int) -> None:
    if pay.user_id != user_id:
        raise Forbidden("Cannot modify other users' fritterPay.")


def is_valid_buyer(freet: Freet, user_id: int) -> None:
    if freet.author_id == user_id:
        raise Forbidden("Cannot buy your own merchant freet.")


def has_payment_connected(db: Session, user_id: int) -> FritterPay:
    """Return the user's first FritterPay, which is what listings snapshot."""
    pay = db.execute(
        select(FritterPay).where(FritterPay.user_id == user_id).order_by(FritterPay.id).limit(1)
    ).scalar_one_or_none()
    if not pay:
        raise PreconditionFailed("Connect your fritterPay first.")
    return pay


def listing_is_for_sale(listing: MerchantFreet) -> None:
    if lifecycle.listing_is_sold(listing):
        raise PreconditionFailed("You cannot buy because it is sold.")
    if not lifecycle.listing_is_for_sale(listing):
        raise PreconditionFailed("This listing is no longer for sale.")


# ---------- content shape ----------
def _bounded_text(value: Optional[str], label: str, limit: int) -> str:
    if value is None or not value.strip():
        raise ValidationFailed(f"{label} must be at least one character long.")
    if len(value) > limit:
        raise ValidationFailed(f"{label} must be no more than {limit} characters.", status_code=413)
    return value


def valid_content(content: Optional[str]) -> str:
    return _bounded_text(content, "Freet content", settings.FREET_MAX_LENGTH)


def valid_listing_name(name: Optional[str]) -> str:
    return _bounded_text(name, "Merchant Freet title", settings.LISTING_NAME_MAX_LENGTH)


def valid_price(raw: Any) -> int:
    """Accept ints and integer strings ("12", " 12 "); zero, negatives, junk and out-of-range values are invalid."""
    if isinstance(raw, bool):
        raise ValidationFailed("Price is invalid.")
    try:
        price = int(str(raw).strip())
    except (TypeError, ValueError):
        raise ValidationFailed("Price is invalid.")
    if price <= 0 or price > MAX_PRICE:
        raise ValidationFailed("Price is invalid.")
    return price


def valid_payment_username(name: Optional[str]) -> str:
    if not name or not USERNAME_RE.match(name):
        raise ValidationFailed({"username": "Username must be a nonempty alphanumeric string."})
    return name


def valid_listing_status(raw: Optional[str]) -> ListingStatus:
    try:
        return ListingStatus(raw)
    except ValueError:
        raise ValidationFailed(f"Listing status must be one of {', '.join(s.value for s in ListingStatus)}.")


def valid_freet_type(raw: Optional[str]) -> FreetType:
    try:
        return FreetType(raw)
    except ValueError:
        raise ValidationFailed(f"Freet type must be one of {', '.join(t.value for t in FreetType)}.")


# ---------- temporal ----------
def valid_future_expiration(expiration: Optional[datetime], now: datetime) -> datetime:
    if expiration is None:
        raise ValidationFailed("Expiration date is required.")
    expiration = lifecycle.to_naive_utc(expiration)
    if expiration <= now:
        raise ValidationFailed("Expiration date has already passed.")
    return expiration


def valid_expiration_string(raw: Optional[str], now: datetime) -> datetime:
    try:
        text = (raw or "").strip()
        # fromisoformat only takes a trailing Z from 3.11 on
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationFailed("Expiration date is invalid.")
    return valid_future_expiration(parsed, now)


def valid_listing_field(field: str, value: Optional[str], now: datetime) -> Any:
    """Check ``value`` for a single-field listing edit and return it parsed."""
    if field == "listingName":
        return valid_listing_name(value)
    if field == "listingPrice":
        return valid_price(value)
    if field == "listingLocation":
        return (value or "").strip() or "none"
    if field == "expiration":
        return valid_expiration_string(value, now)
    if field == "listingStatus":
        return valid_listing_status(value)
    raise ValidationFailed(f"Unknown listing field {field}.")


def can_archive(freet: Freet, now: datetime) -> None:
    if lifecycle.is_expired(freet, now):
        raise ValidationFailed("Cannot be archived")


def can_unarchive(freet: Freet, now: datetime) -> None:
    if lifecycle.is_not_expired(freet, now):
        raise ValidationFailed("Cannot be unarchived")
