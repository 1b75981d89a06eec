import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fritter.core.auth import get_current_user
from fritter.core.db import get_db
from fritter.models.user import User
from fritter.schemas.freet import MessageOut
from fritter.schemas.user import UserOut
from fritter.services.projector import format_date

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/me", response_model=UserOut)
def get_me(me: User = Depends(get_current_user)):
    return UserOut(user_id=me.id, username=me.username, date_joined=format_date(me.date_joined))


@router.delete("/me", response_model=MessageOut)
def delete_me(me: User = Depends(get_current_user), db: Session = Depends(get_db)):
    # freets (with their listings) and fritterPays cascade from the user row
    uid = me.id
    db.delete(me)
    db.commit()
    logger.info("user %s deleted", uid)
    return MessageOut(message="Your account has been deleted successfully.")
