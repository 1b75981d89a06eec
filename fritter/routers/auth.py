from fastapi import APIRouter, Depends, HTTPException, status, Response, Request
from sqlalchemy.orm import Session

from fritter.core.config import settings
from fritter.core.db import get_db
from fritter.models.user import User
from fritter.schemas.auth import SignupIn, LoginIn, TokenOut
from fritter.schemas.user import UserOut
from fritter.core.security import (
    hash_password,
    verify_password,
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
    decode_access_token,
)
from fritter.services.lifecycle import utcnow
from fritter.services.projector import format_date

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def signup(payload: SignupIn, db: Session = Depends(get_db)):
    if db.query(User).filter(User.username == payload.username).first():
        raise HTTPException(status_code=409, detail="USERNAME_DUPLICATE")

    u = User(
        username=payload.username,
        password_hash=hash_password(payload.password),
        date_joined=utcnow(),
    )
    db.add(u)
    db.commit()
    db.refresh(u)

    return UserOut(user_id=u.id, username=u.username, date_joined=format_date(u.date_joined))


@router.post("/login", response_model=TokenOut, status_code=status.HTTP_200_OK)
def login(payload: LoginIn, response: Response, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.username == payload.username).first()

    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=401, detail="invalid_credentials")

    uid = str(user.id)

    access = create_access_token(sub=uid)
    refresh = create_refresh_token(sub=uid)

    response.set_cookie(
        key="refreshToken",
        value=refresh,
        httponly=True,
        secure=True,
        samesite="none",
        max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        path="/",
    )

    return TokenOut(access_token=access)


@router.post("/refresh", response_model=TokenOut, status_code=status.HTTP_200_OK)
def refresh(request: Request):
    token = request.cookies.get("refreshToken")
    if not token:
        raise HTTPException(status_code=401, detail="no_refresh_token")

    payload = decode_refresh_token(token)
    sub = payload.get("sub")
    if not sub:
        raise HTTPException(status_code=401, detail="invalid_token_payload")

    return TokenOut(access_token=create_access_token(sub=sub))


@router.post("/logout", status_code=status.HTTP_200_OK)
def logout(request: Request, response: Response):
    auth = request.headers.get("Authorization")
    if not auth or not auth.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="missing_bearer_token")

    decode_access_token(auth.split(" ", 1)[1].strip())

    response.delete_cookie(key="refreshToken", httponly=True, secure=True, samesite="none", path="/")
    return {"message": "You are now logged out."}
