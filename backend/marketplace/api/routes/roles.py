from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from pydantic import BaseModel, ConfigDict
from marketplace.core.database import get_db
from marketplace.services.role_registry import RoleRegistry

router = APIRouter(prefix="/roles", tags=["roles"])


class RoleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    display_name: str
    can_sell: bool
    can_moderate: bool
    can_access_admin: bool


@router.get("", response_model=list[RoleResponse])
async def list_roles(db: Session = Depends(get_db)):
    """List all roles with their permission flags"""
    return RoleRegistry(db).list_roles()
