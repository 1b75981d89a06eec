from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from fritter.core.db import Base


class FritterPay(Base):
    __tablename__ = "fritter_pays"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    payment_type = Column(String(50), nullable=False)
    payment_username = Column(String(100), nullable=False)
    payment_link = Column(String(500), nullable=False, default="")

    user = relationship("User", back_populates="fritter_pays", lazy="joined")
