from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from fritter.core.auth import get_current_user, get_current_user_optional
from fritter.core.db import get_db
from fritter.core.errors import Forbidden
from fritter.models.user import User
from fritter.schemas.freet import MessageOut
from fritter.schemas.fritter_pay import FritterPayIn, FritterPayOut, FritterPayMessageOut
from fritter.services import fritter_pay as pay_service
from fritter.services import policy
from fritter.services.projector import to_fritter_pay_out

router = APIRouter(prefix="/api/payment-profiles", tags=["fritterPay"])


@router.get("", response_model=List[FritterPayOut])
def list_fritter_pays(
    author: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    me: Optional[User] = Depends(get_current_user_optional),
):
    if author is None:
        return [to_fritter_pay_out(p) for p in pay_service.find_all(db)]

    # looking up someone's payment handle requires a session
    if me is None:
        raise Forbidden("You must be logged in to complete this action.")
    user = policy.author_exists(db, author)
    return [to_fritter_pay_out(p) for p in pay_service.find_all_by_user(db, user)]


@router.post("", response_model=FritterPayMessageOut, status_code=status.HTTP_201_CREATED)
def create_fritter_pay(
    body: FritterPayIn,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    username = policy.valid_payment_username(body.payment_username)
    pay = pay_service.create_fritter_pay(db, me.id, body.payment_type, username, body.payment_link)
    return FritterPayMessageOut(
        message="Your fritterPay information was added successfully.",
        fritter_pay=to_fritter_pay_out(pay),
    )


@router.put("/{fritter_pay_id}", response_model=FritterPayMessageOut)
def update_fritter_pay(
    fritter_pay_id: str,
    body: FritterPayIn,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    pay = policy.fritter_pay_exists(db, fritter_pay_id)
    policy.is_payment_modifier(pay, me.id)
    username = policy.valid_payment_username(body.payment_username)

    pay = pay_service.update_fritter_pay(db, pay, body.payment_type, username, body.payment_link)
    return FritterPayMessageOut(
        message="fritterPay was updated successfully.",
        fritter_pay=to_fritter_pay_out(pay),
    )


@router.delete("/{fritter_pay_id}", response_model=MessageOut)
def delete_fritter_pay(
    fritter_pay_id: str,
    db: Session = Depends(get_db),
    me: User = Depends(get_current_user),
):
    pay = policy.fritter_pay_exists(db, fritter_pay_id)
    policy.is_payment_modifier(pay, me.id)
    pay_service.delete_fritter_pay(db, pay)
    return MessageOut(message="Your fritterPay entry was deleted successfully.")
