"""
Role lookup and bootstrap seeding.

Roles are read-only reference data from the application's point of view:
this module can find and list them, and insert the well-known defaults
when they are missing, but never updates or deletes a role.
"""

from typing import List, NamedTuple, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from marketplace.core.errors import RoleNotFoundError
from marketplace.models.role import Role, RoleName, role_name_value
import logging

logger = logging.getLogger(__name__)


class RoleDefinition(NamedTuple):
    name: RoleName
    display_name: str
    can_sell: bool = False
    can_moderate: bool = False
    can_access_admin: bool = False


DEFAULT_ROLES = (
    RoleDefinition(RoleName.BUYER, "Buyer"),
    RoleDefinition(RoleName.SELLER, "Seller", can_sell=True),
    RoleDefinition(RoleName.MODERATOR, "Moderator", can_moderate=True),
    RoleDefinition(RoleName.ADMIN, "Administrator", can_sell=True, can_moderate=True, can_access_admin=True),
)


class RoleRegistry:
    """Session-backed lookup of roles by their stable name"""

    def __init__(self, db: Session):
        self.db = db

    def find_role_by_name(self, name) -> Optional[Role]:
        return self.db.query(Role).filter(Role.name == role_name_value(name)).first()

    def get_role_by_name(self, name) -> Role:
        """Like find_role_by_name, but a missing role raises RoleNotFoundError"""
        role = self.find_role_by_name(name)
        if role is None:
            raise RoleNotFoundError(role_name_value(name))
        return role

    def list_roles(self) -> List[Role]:
        return self.db.query(Role).order_by(Role.id).all()


def seed_default_roles(db: Session) -> int:
    """
    Insert any of the well-known roles that do not exist yet.

    Existing roles are left as they are. Returns the number of roles created.
    """
    existing = {name for (name,) in db.query(Role.name).all()}
    created = 0
    for definition in DEFAULT_ROLES:
        if definition.name.value in existing:
            continue
        db.add(Role(
            name=definition.name.value,
            display_name=definition.display_name,
            can_sell=definition.can_sell,
            can_moderate=definition.can_moderate,
            can_access_admin=definition.can_access_admin,
        ))
        created += 1

    if not created:
        return 0

    try:
        db.commit()
    except IntegrityError:
        # Another worker seeded the same names between our read and commit
        db.rollback()
        logger.info("Default roles were seeded concurrently, skipping")
        return 0

    logger.info(f"Seeded {created} default roles")
    return created
