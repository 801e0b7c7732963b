from typing import Any, Dict, Optional
from sqlalchemy.orm import Session
from marketplace.core.config import settings
from marketplace.core.errors import UnknownLocationError
from marketplace.core.security import get_password_hash
from marketplace.models.location import City, Country, State
from marketplace.models.user import User
from marketplace.services.role_registry import RoleRegistry
import logging

logger = logging.getLogger(__name__)

# Location foreign keys checked before insert, in the order they are reported
LOCATION_REFERENCES = (
    ("country", "country_id", Country),
    ("state", "state_id", State),
    ("city", "city_id", City),
)


class UserService:
    @staticmethod
    def register(
        db: Session,
        name: str,
        email: str,
        password: str,
        **profile: Any
    ) -> User:
        """
        Create a user with the default role.

        Extra keyword arguments are copied onto the user (phone, bio,
        location fields). Raises RoleNotFoundError if the default role
        has not been seeded and UnknownLocationError if a country, state
        or city id does not exist.
        """
        default_role = RoleRegistry(db).get_role_by_name(settings.DEFAULT_ROLE)
        UserService.check_location_references(db, profile)

        user = User(
            name=name,
            email=email,
            password=get_password_hash(password),
            role=default_role,
            **profile
        )
        db.add(user)
        db.commit()
        # Refresh to load auto-generated fields (id, timestamps)
        db.refresh(user)

        logger.info(f"Registered user {user.id} with role {default_role.name}")
        return user

    @staticmethod
    def check_location_references(db: Session, fields: Dict[str, Any]) -> None:
        for kind, field, model in LOCATION_REFERENCES:
            location_id = fields.get(field)
            if location_id is not None and db.get(model, location_id) is None:
                raise UnknownLocationError(kind, location_id)

    @staticmethod
    def get_user(db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()


user_service = UserService()
