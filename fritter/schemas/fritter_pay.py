# fritter/schemas/fritter_pay.py
from typing import Optional

from pydantic import Field

from .base import BaseSchema


class FritterPayIn(BaseSchema):
    payment_type: str = "Venmo"
    payment_username: Optional[str] = None
    payment_link: Optional[str] = ""


class FritterPayOut(BaseSchema):
    id: str = Field(..., alias="_id")
    user: str
    payment_type: str
    payment_username: str
    payment_link: str = ""


class FritterPayMessageOut(BaseSchema):
    message: str
    fritter_pay: FritterPayOut
