from enum import Enum
from sqlalchemy import Column, Integer, String, Boolean
from marketplace.core.database import Base


class RoleName(str, Enum):
    """Well-known role names. Roles with these names are seeded at startup."""
    BUYER = "buyer"
    SELLER = "seller"
    MODERATOR = "moderator"
    ADMIN = "admin"


def role_name_value(name) -> str:
    """Return the plain string for a RoleName member or a raw role name"""
    # Enum hashes by member name, so raw strings and members must be normalized
    # before set membership checks
    return name.value if isinstance(name, RoleName) else str(name)


class Role(Base):
    """
    Role model holding a stable name and its permission flags.

    Roles are reference data: they are created at bootstrap and never
    modified by user actions. Every user points at exactly one role.
    """
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, index=True)
    # name is the stable lookup key (buyer, seller, moderator, admin)
    name = Column(String(50), unique=True, index=True, nullable=False)
    display_name = Column(String(100), nullable=False)
    can_sell = Column(Boolean, nullable=False, default=False)
    can_moderate = Column(Boolean, nullable=False, default=False)
    can_access_admin = Column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<Role {self.name}>"
