# fritter/schemas/freet.py
from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import Field

from .base import BaseSchema


# ---------- requests ----------
class FreetCreateIn(BaseSchema):
    content: Optional[str] = None
    type_freet: str = "default"
    expiration: Optional[datetime] = None
    listing_name: Optional[str] = None
    # validated as a positive integer by the policy layer, strings allowed
    listing_price: Optional[Union[int, str]] = None
    listing_location: Optional[str] = None


class FreetUpdateIn(BaseSchema):
    content: Optional[str] = None
    expiration: Optional[datetime] = None


class ArchiveIn(BaseSchema):
    archive_status: str = "archive"


class ListingFieldIn(BaseSchema):
    field: Literal["listingName", "listingPrice", "listingLocation", "expiration", "listingStatus"]
    value: str


# ---------- responses ----------
class MerchantFreetOut(BaseSchema):
    id: str = Field(..., alias="_id")
    freet: str
    author: str
    expiration: str
    date_modified: str
    listing_status: str
    listing_name: str
    listing_price: int
    listing_location: str
    payment_username: str
    payment_type: str
    buyer: Optional[str] = None


class FreetOut(BaseSchema):
    id: str = Field(..., alias="_id")
    author: str
    content: str
    date_created: str
    date_modified: str
    expiration: str
    freet_type: str
    edited: bool
    merchant_freet: Optional[MerchantFreetOut] = None


class FreetMessageOut(BaseSchema):
    message: str
    freet: FreetOut
    merchant_freet: Optional[MerchantFreetOut] = None


class MerchantFreetMessageOut(BaseSchema):
    message: str
    merchant_freet: MerchantFreetOut


class MessageOut(BaseSchema):
    message: str
