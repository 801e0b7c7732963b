from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from marketplace.core.database import Base


class SellerProfile(Base):
    """
    Seller-specific data for a user who sells on the marketplace.

    Owned by the seller onboarding flow; a user has at most one profile.
    """
    __tablename__ = "seller_profiles"

    id = Column(Integer, primary_key=True, index=True)
    # unique=True keeps the user <-> profile relation one-to-one
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    business_name = Column(String, nullable=True)
    # Set by moderators once the seller's documents are checked
    is_verified = Column(Boolean, nullable=False, default=False)
    # Sellers can pause their account without losing the profile
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="seller_profile")
    appointments = relationship("SellerAppointment", back_populates="seller_profile")
