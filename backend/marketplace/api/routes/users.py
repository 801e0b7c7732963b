from datetime import datetime
from typing import Any, Dict, Optional
from decimal import Decimal
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from pydantic import BaseModel, EmailStr, Field
from marketplace.core.database import get_db
from marketplace.core.errors import RoleNotFoundError, UnknownLocationError
from marketplace.models.user import SellerUpgrade, User
from marketplace.services.user_service import user_service
from marketplace.services.seller_upgrade_service import seller_upgrade_service
from marketplace.api.dependencies import get_user_or_404
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


class UserCreate(BaseModel):
    name: str
    email: EmailStr
    password: str = Field(min_length=8)
    phone: Optional[str] = None
    bio: Optional[str] = None
    location_display: Optional[str] = None
    location_data: Optional[Dict[str, Any]] = None
    country_id: Optional[int] = None
    state_id: Optional[int] = None
    city_id: Optional[int] = None
    address_line: Optional[str] = None
    postal_code: Optional[str] = None
    latitude: Optional[Decimal] = Field(default=None, ge=-90, le=90)
    longitude: Optional[Decimal] = Field(default=None, ge=-180, le=180)
    google_place_id: Optional[str] = None


class Coordinates(BaseModel):
    latitude: float
    longitude: float


class UserResponse(BaseModel):
    """Public representation of a user. Password and remember token are never included."""
    id: int
    name: str
    email: str
    phone: Optional[str]
    bio: Optional[str]
    role: str
    role_display_name: str
    can_sell: bool
    can_moderate: bool
    can_access_admin: bool
    is_verified_seller: bool
    has_active_seller_account: bool
    email_verified_at: Optional[datetime]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    location_display: Optional[str]
    location_data: Optional[Dict[str, Any]]
    country_id: Optional[int]
    state_id: Optional[int]
    city_id: Optional[int]
    address_line: Optional[str]
    postal_code: Optional[str]
    google_place_id: Optional[str]
    has_location_data: bool
    full_location: Optional[str]
    coordinates: Optional[Coordinates]

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        """Build the response from a User, resolving role and location data"""
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            phone=user.phone,
            bio=user.bio,
            role=user.get_role_name(),
            role_display_name=user.get_role_display_name(),
            can_sell=user.can_sell(),
            can_moderate=user.can_moderate(),
            can_access_admin=user.can_access_admin(),
            is_verified_seller=user.is_verified_seller(),
            has_active_seller_account=user.has_active_seller_account(),
            email_verified_at=user.email_verified_at,
            created_at=user.created_at,
            updated_at=user.updated_at,
            location_display=user.location_display,
            location_data=user.location_data,
            country_id=user.country_id,
            state_id=user.state_id,
            city_id=user.city_id,
            address_line=user.address_line,
            postal_code=user.postal_code,
            google_place_id=user.google_place_id,
            has_location_data=user.has_location_data(),
            full_location=user.get_full_location(),
            coordinates=user.get_coordinates(),
        )


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user with the default role"""
    if user_service.get_user_by_email(db, user_data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    try:
        user = user_service.register(db, **user_data.model_dump(exclude_none=True))
    except RoleNotFoundError as e:
        # Roles are seeded on startup; reaching this means bootstrap was skipped
        logger.error(f"Registration failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Default role is not configured"
        )
    except UnknownLocationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unknown {e.kind}"
        )
    except IntegrityError:
        # Location ids are checked by the service, so this is the email race:
        # two registrations with the same email can both pass the check
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )
    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database error occurred"
        )

    return UserResponse.from_user(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user: User = Depends(get_user_or_404)):
    """Get a user by ID"""
    return UserResponse.from_user(user)


@router.post("/{user_id}/upgrade-to-seller", response_model=UserResponse)
async def upgrade_to_seller(
    user: User = Depends(get_user_or_404),
    db: Session = Depends(get_db)
):
    """Turn a buyer account into a seller account"""
    try:
        outcome = seller_upgrade_service.upgrade(db, user)
    except SQLAlchemyError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database error occurred"
        )

    if outcome is SellerUpgrade.NOT_ELIGIBLE:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Only buyers can upgrade to a seller account"
        )
    if outcome is SellerUpgrade.SELLER_ROLE_MISSING:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Seller role is not configured"
        )

    return UserResponse.from_user(user)
