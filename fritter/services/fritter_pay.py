#fritter/services/fritter_pay.py

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from fritter.models.fritter_pay import FritterPay
from fritter.models.user import User

logger = logging.getLogger(__name__)


def create_fritter_pay(db: Session, user_id: int, payment_type: str, payment_username: str, payment_link: Optional[str]) -> FritterPay:
    pay = FritterPay(
        user_id=user_id,
        payment_type=payment_type,
        payment_username=payment_username,
        payment_link=payment_link or "",
    )
    db.add(pay)
    db.commit()
    db.refresh(pay)
    logger.info("user %s linked %s fritterPay %s", user_id, payment_type, pay.id)
    return pay


def find_all(db: Session) -> List[FritterPay]:
    return list(db.execute(select(FritterPay).order_by(FritterPay.id)).unique().scalars().all())


def find_all_by_user(db: Session, user: User) -> List[FritterPay]:
    q = select(FritterPay).where(FritterPay.user_id == user.id).order_by(FritterPay.id)
    return list(db.execute(q).unique().scalars().all())


def update_fritter_pay(db: Session, pay: FritterPay, payment_type: str, payment_username: str, payment_link: Optional[str]) -> FritterPay:
    # listings keep the payment details they were created with
    pay.payment_type = payment_type
    pay.payment_username = payment_username
    if payment_link:
        pay.payment_link = payment_link
    db.commit()
    db.refresh(pay)
    return pay


def delete_fritter_pay(db: Session, pay: FritterPay) -> int:
    pid = pay.id
    db.delete(pay)
    db.commit()
    logger.info("fritterPay %s deleted", pid)
    return pid
