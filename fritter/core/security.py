from datetime import datetime, timedelta, timezone

from fastapi import HTTPException, status
from jose import jwt, JWTError
from passlib.hash import argon2

from fritter.core.config import settings


def hash_password(plain: str) -> str:
    return argon2.using(time_cost=2, memory_cost=102400, parallelism=8).hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    return argon2.verify(plain, hashed)


def _encode(sub: str, secret: str, lifetime: timedelta) -> str:
    now = datetime.now(timezone.utc)
    payload = {"sub": str(sub), "iat": now, "exp": now + lifetime}
    return jwt.encode(payload, secret, algorithm=settings.JWT_ALG)


def create_access_token(sub: str) -> str:
    return _encode(sub, settings.JWT_ACCESS_SECRET, timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))


def create_refresh_token(sub: str) -> str:
    return _encode(sub, settings.JWT_REFRESH_SECRET, timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS))


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.JWT_ACCESS_SECRET, algorithms=[settings.JWT_ALG], options={"verify_aud": False})
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="INVALID_TOKEN", headers={"WWW-Authenticate": "Bearer"})


def decode_refresh_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.JWT_REFRESH_SECRET, algorithms=[settings.JWT_ALG], options={"verify_aud": False})
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="INVALID_TOKEN", headers={"WWW-Authenticate": "Bearer"})
