from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session
from marketplace.core.database import get_db
from marketplace.models.user import User
from marketplace.services.user_service import user_service


def get_user_or_404(user_id: int, db: Session = Depends(get_db)) -> User:
    """
    Load the user named in the path.

    Used by every /users/{user_id} route so a missing user is always a 404.
    """
    user = user_service.get_user(db, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user
