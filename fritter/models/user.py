from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from fritter.core.db import Base


class User(Base):
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    username = Column(String(30), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    date_joined = Column(DateTime, server_default=func.now(), nullable=False)

    freets = relationship(
        "Freet",
        back_populates="author",
        cascade="all, delete-orphan",
        foreign_keys="Freet.author_id",
    )
    fritter_pays = relationship(
        "FritterPay",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="FritterPay.id",
    )
