from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from marketplace.models.user import SellerUpgrade, User
from marketplace.services.role_registry import RoleRegistry
import logging

logger = logging.getLogger(__name__)


class SellerUpgradeService:
    """Runs and persists the buyer -> seller transition"""

    @staticmethod
    def upgrade(db: Session, user: User) -> SellerUpgrade:
        """
        Upgrade a buyer to seller and commit the new role.

        Concurrent upgrades of the same user are not serialized here; both
        writes set the same role_id, so the database ends in the same state.
        """
        outcome = user.upgrade_to_seller(RoleRegistry(db))

        if outcome is SellerUpgrade.UPGRADED:
            try:
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Error persisting seller upgrade for user {user.id}: {str(e)}")
                raise
            db.refresh(user)
            logger.info(f"User {user.id} upgraded to seller")
        elif outcome is SellerUpgrade.SELLER_ROLE_MISSING:
            logger.warning(f"Cannot upgrade user {user.id}: seller role is not configured")
        else:
            logger.info(f"User {user.id} is not eligible for seller upgrade (role: {user.get_role_name()})")

        return outcome


seller_upgrade_service = SellerUpgradeService()
