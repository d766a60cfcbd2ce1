"""
Pydantic schemas for users, businesses and onboarding
"""

from datetime import datetime
from typing import Optional
import uuid

from servicetracker.models.user import UserRole
from servicetracker.schemas.base import CamelModel


class BusinessSummary(CamelModel):
    name: str
    subdomain: str


class BusinessResponse(CamelModel):
    id: uuid.UUID
    name: str
    subdomain: str
    plan: str
    logo_url: Optional[str] = None
    brand_colors: Optional[dict] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class UserResponse(CamelModel):
    id: uuid.UUID
    business_id: uuid.UUID
    email: str
    name: str
    role: UserRole
    created_at: datetime
    updated_at: Optional[datetime] = None


class TechnicianSummary(CamelModel):
    id: uuid.UUID
    name: str
    email: str


class OnboardingCreate(CamelModel):
    """Body of the onboarding wizard's final step"""
    business_name: Optional[str] = None
    business_type: Optional[str] = None
    team_size: Optional[str] = None
    primary_goal: Optional[str] = None
    brand_colors: Optional[dict[str, Optional[str]]] = None
    user_name: Optional[str] = None
    logo_url: Optional[str] = None


class OnboardingResponse(CamelModel):
    success: bool = True
    user: UserResponse
    business: BusinessResponse


class UserBusinessResponse(CamelModel):
    user: UserResponse
    business: BusinessResponse


class AuthUser(CamelModel):
    id: uuid.UUID
    email: Optional[str] = None
    name: Optional[str] = None


class UserCheckResponse(CamelModel):
    exists: bool
    user: Optional[UserResponse] = None
    business: Optional[BusinessResponse] = None
    auth_user: AuthUser
