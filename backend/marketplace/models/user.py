from enum import Enum
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, JSON, Numeric
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from marketplace.core.database import Base
from marketplace.core.errors import BrokenRoleReferenceError
from marketplace.models.role import Role, RoleName, role_name_value
from marketplace.models.location import City, Country, State  # noqa: F401
from marketplace.models.seller_profile import SellerProfile
from marketplace.models.seller_appointment import SellerAppointment
from marketplace.services.location_resolver import location_resolver

if TYPE_CHECKING:
    from marketplace.services.role_registry import RoleRegistry


class SellerUpgrade(str, Enum):
    """Outcome of User.upgrade_to_seller()"""
    UPGRADED = "upgraded"
    # Caller is not a buyer (already a seller, or moderator/admin)
    NOT_ELIGIBLE = "not_eligible"
    # Registry has no "seller" role; user is left untouched
    SELLER_ROLE_MISSING = "seller_role_missing"


class User(Base):
    """
    User model representing marketplace participants.

    What a user may do is decided by the referenced Role. Buyers can turn
    themselves into sellers; every other role change happens through admin
    tooling. Passwords are stored as hashes and never serialized.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    # Email is unique and indexed for fast lookups
    email = Column(String, unique=True, index=True, nullable=False)
    # bcrypt hash - never plaintext, never exposed in responses
    password = Column(String, nullable=False)
    remember_token = Column(String(100), nullable=True)
    email_verified_at = Column(DateTime(timezone=True), nullable=True)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False)
    phone = Column(String(50), nullable=True)
    bio = Column(Text, nullable=True)

    # Location - location_display is a user-typed override, the rest is
    # filled from geocoding/reference tables
    location_display = Column(String, nullable=True)
    location_data = Column(JSON, nullable=True)
    country_id = Column(Integer, ForeignKey("countries.id"), nullable=True)
    state_id = Column(Integer, ForeignKey("states.id"), nullable=True)
    city_id = Column(Integer, ForeignKey("cities.id"), nullable=True)
    address_line = Column(String, nullable=True)
    postal_code = Column(String(20), nullable=True)
    # 8 fractional digits, roughly millimetre precision
    latitude = Column(Numeric(10, 8), nullable=True)
    longitude = Column(Numeric(11, 8), nullable=True)
    google_place_id = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    role = relationship("Role")
    seller_profile = relationship("SellerProfile", back_populates="user", uselist=False)
    buyer_appointments = relationship(
        "SellerAppointment",
        back_populates="buyer",
        foreign_keys=[SellerAppointment.buyer_id],
    )
    country = relationship("Country")
    state = relationship("State")
    city = relationship("City")

    def related_role(self) -> Role:
        if self.role is None:
            raise BrokenRoleReferenceError(self.id, self.role_id)
        return self.role

    def related_seller_profile(self) -> Optional[SellerProfile]:
        return self.seller_profile

    def related_appointments(self) -> List[SellerAppointment]:
        return list(self.buyer_appointments)

    def get_role_name(self) -> str:
        return self.related_role().name

    def get_role_display_name(self) -> str:
        return self.related_role().display_name

    # Role checks
    def has_role(self, role_name) -> bool:
        return self.get_role_name() == role_name_value(role_name)

    def has_any_role(self, role_names: Iterable) -> bool:
        return self.get_role_name() in {role_name_value(name) for name in role_names}

    def is_buyer(self) -> bool:
        return self.has_role(RoleName.BUYER)

    def is_seller(self) -> bool:
        return self.has_role(RoleName.SELLER)

    def is_moderator(self) -> bool:
        return self.has_role(RoleName.MODERATOR)

    def is_admin(self) -> bool:
        return self.has_role(RoleName.ADMIN)

    # Permission checks - delegated to the role's flags
    def can_sell(self) -> bool:
        return bool(self.related_role().can_sell)

    def can_moderate(self) -> bool:
        return bool(self.related_role().can_moderate)

    def can_access_admin(self) -> bool:
        return bool(self.related_role().can_access_admin)

    def can_upgrade_to_seller(self) -> bool:
        return self.is_buyer()

    def upgrade_to_seller(self, roles: "RoleRegistry") -> SellerUpgrade:
        """
        Switch a buyer to the seller role.

        Only the in-memory role reference changes; committing is up to the
        caller (see SellerUpgradeService). Non-buyers and a missing seller
        role both leave the user untouched and are reported in the result.
        """
        if not self.can_upgrade_to_seller():
            return SellerUpgrade.NOT_ELIGIBLE

        seller_role = roles.find_role_by_name(RoleName.SELLER)
        if seller_role is None:
            return SellerUpgrade.SELLER_ROLE_MISSING

        self.role = seller_role
        self.role_id = seller_role.id
        return SellerUpgrade.UPGRADED

    # Seller profile checks
    def is_verified_seller(self) -> bool:
        profile = self.related_seller_profile()
        return profile is not None and bool(profile.is_verified)

    def has_active_seller_account(self) -> bool:
        profile = self.related_seller_profile()
        return profile is not None and bool(profile.is_active)

    # Location
    def get_full_location(self) -> Optional[str]:
        return location_resolver.full_location(
            self.location_display, city=self.city, state=self.state, country=self.country
        )

    @property
    def full_location(self) -> Optional[str]:
        return self.get_full_location()

    def has_location_data(self) -> bool:
        return location_resolver.has_location_data(self.location_display, self.location_data)

    def get_coordinates(self) -> Optional[Dict[str, float]]:
        return location_resolver.coordinates(self.latitude, self.longitude)

    @property
    def coordinates(self) -> Optional[Dict[str, float]]:
        return self.get_coordinates()
