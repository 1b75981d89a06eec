import enum

from sqlalchemy import Column, Integer, String, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from fritter.core.db import Base


class ListingStatus(str, enum.Enum):
    FORSALE = "forsale"
    SOLD = "sold"
    DEACTIVATED = "deactivated"


class MerchantFreet(Base):
    __tablename__ = "merchant_freets"

    id = Column(Integer, primary_key=True, index=True)

    # one listing per parent freet
    freet_id = Column(Integer, ForeignKey("freets.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)

    listing_status = Column(String(20), nullable=False, default=ListingStatus.FORSALE.value)
    listing_name = Column(String(80), nullable=False)
    listing_price = Column(Integer, nullable=False)
    listing_location = Column(String(200), nullable=False, default="none")

    # copied from the seller's FritterPay when the listing is created
    payment_username = Column(String(100), nullable=False)
    payment_type = Column(String(50), nullable=False, default="Venmo")

    # buyer username, set only once sold
    buyer = Column(String(30), nullable=True)

    freet = relationship("Freet", back_populates="merchant_freet")

    __table_args__ = (
        CheckConstraint(
            "listing_status IN ('forsale', 'sold', 'deactivated')",
            name="ck_merchant_freets_status",
        ),
        CheckConstraint("listing_price > 0", name="ck_merchant_freets_price"),
        CheckConstraint(
            "(listing_status = 'sold') = (buyer IS NOT NULL)",
            name="ck_merchant_freets_buyer",
        ),
    )
