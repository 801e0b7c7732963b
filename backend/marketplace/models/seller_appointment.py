from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from marketplace.core.database import Base


class SellerAppointment(Base):
    """Appointment booked by a buyer with a seller."""
    __tablename__ = "seller_appointments"

    id = Column(Integer, primary_key=True, index=True)
    seller_profile_id = Column(Integer, ForeignKey("seller_profiles.id"), nullable=False)
    buyer_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    scheduled_at = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    seller_profile = relationship("SellerProfile", back_populates="appointments")
    buyer = relationship("User", back_populates="buyer_appointments")
