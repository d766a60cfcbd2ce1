"""
User model - authenticated principal owned by a business
"""

from sqlmodel import Field, SQLModel
from datetime import datetime
from typing import Optional
from enum import Enum
import uuid

from servicetracker.models.timestamps import TIMESTAMP, utcnow


class UserRole(str, Enum):
    """User roles; only ADMIN is granted today"""
    ADMIN = "ADMIN"


class User(SQLModel, table=True):
    """User model with tenant isolation"""

    __tablename__ = "users"

    # Same value as the identity provider's subject
    id: uuid.UUID = Field(primary_key=True)
    business_id: uuid.UUID = Field(
        foreign_key="businesses.id",
        index=True,
        description="Business ID for multi-tenant isolation"
    )

    email: str = Field(unique=True, index=True, nullable=False, max_length=255)
    name: str = Field(nullable=False, max_length=255)
    role: UserRole = Field(default=UserRole.ADMIN, nullable=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_type=TIMESTAMP)
    updated_at: Optional[datetime] = Field(default=None, sa_type=TIMESTAMP)
