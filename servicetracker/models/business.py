"""
Business model - the tenant root
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import Column, JSON
from datetime import datetime
from typing import Optional
import uuid

from servicetracker.models.timestamps import TIMESTAMP, utcnow


class Business(SQLModel, table=True):
    """A service business; every other row carries its id"""

    __tablename__ = "businesses"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(index=True, nullable=False, max_length=255)
    subdomain: str = Field(
        unique=True,
        index=True,
        nullable=False,
        max_length=63,
        description="Derived from the name at creation, never changed afterwards"
    )
    logo_url: Optional[str] = Field(default=None, max_length=500)

    # Primary/secondary colors plus onboarding answers (businessType, teamSize, primaryGoal)
    brand_colors: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    plan: str = Field(default="starter", max_length=50, description="Subscription plan")

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_type=TIMESTAMP, index=True)
    updated_at: Optional[datetime] = Field(default=None, sa_type=TIMESTAMP)
