"""
Pydantic schemas for customers
"""

from datetime import datetime
from typing import Optional
import uuid

from servicetracker.schemas.base import CamelModel


class CustomerWrite(CamelModel):
    """Create/update body; presence and shape are checked by the registry"""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None


class CustomerSummary(CamelModel):
    id: uuid.UUID
    name: str
    email: str
    phone: Optional[str] = None


class CustomerResponse(CamelModel):
    id: uuid.UUID
    business_id: uuid.UUID
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class CustomerEnvelope(CamelModel):
    success: bool = True
    customer: CustomerResponse


class CustomerUpdatedResponse(CamelModel):
    message: str = "Customer updated successfully"
    customer: CustomerResponse
