"""
Customer model
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import UniqueConstraint
from datetime import datetime
from typing import Optional
import uuid

from servicetracker.models.timestamps import TIMESTAMP, utcnow


class Customer(SQLModel, table=True):
    """Customer of a business, unique by email within that business"""

    __tablename__ = "customers"
    __table_args__ = (
        UniqueConstraint("business_id", "email", name="uq_customer_business_email"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    business_id: uuid.UUID = Field(
        foreign_key="businesses.id",
        index=True,
        description="Business ID for multi-tenant isolation"
    )

    name: str = Field(nullable=False, max_length=255)
    email: str = Field(index=True, nullable=False, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    address: Optional[str] = Field(default=None, max_length=500)
    notes: Optional[str] = Field(default=None, max_length=5000)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_type=TIMESTAMP, index=True)
    updated_at: Optional[datetime] = Field(default=None, sa_type=TIMESTAMP)
