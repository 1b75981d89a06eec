from pydantic import Field

from .base import BaseSchema


class SignupIn(BaseSchema):
    username: str = Field(..., min_length=1, max_length=30, pattern=r"^\w+$")
    password: str = Field(..., min_length=8)


class LoginIn(BaseSchema):
    username: str
    password: str = Field(..., min_length=8)


class TokenOut(BaseSchema):
    access_token: str
