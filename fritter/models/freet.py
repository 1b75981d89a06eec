import enum
from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from fritter.core.db import Base

# expiration of a freet that never expires
FAR_FUTURE = datetime(4000, 1, 1)


class FreetType(str, enum.Enum):
    DEFAULT = "default"
    FLEETING = "fleeting"
    MERCHANT = "merchant"


class Freet(Base):
    __tablename__ = "freets"

    id = Column(Integer, primary_key=True, index=True)
    author_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    content = Column(Text, nullable=False)
    freet_type = Column(String(20), nullable=False, default=FreetType.DEFAULT.value)
    edited = Column(Boolean, nullable=False, default=False)

    # all timestamps are naive UTC
    date_created = Column(DateTime, nullable=False)
    date_modified = Column(DateTime, nullable=False, index=True)
    expiration = Column(DateTime, nullable=False, default=FAR_FUTURE)

    author = relationship("User", back_populates="freets", lazy="joined")
    merchant_freet = relationship(
        "MerchantFreet",
        back_populates="freet",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        CheckConstraint(
            "freet_type IN ('default', 'fleeting', 'merchant')",
            name="ck_freets_freet_type",
        ),
    )
