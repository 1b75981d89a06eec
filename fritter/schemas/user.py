# fritter/schemas/user.py
from .base import BaseSchema


class UserOut(BaseSchema):
    user_id: int
    username: str
    date_joined: str
