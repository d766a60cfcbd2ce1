"""
Pydantic schemas for service tickets and their updates
"""

from datetime import datetime
from typing import Optional
import uuid

from servicetracker.models.service import ServicePriority, ServiceStatus
from servicetracker.schemas.base import CamelModel
from servicetracker.schemas.customer import CustomerResponse, CustomerSummary
from servicetracker.schemas.user import BusinessSummary, TechnicianSummary


class ServiceCreate(CamelModel):
    """Create body; presence, email shape and priority are checked by the lifecycle manager"""
    title: Optional[str] = None
    description: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    priority: Optional[str] = None


class ServiceStatusUpdate(CamelModel):
    status: Optional[str] = None
    notes: Optional[str] = None


class TechnicianAssignment(CamelModel):
    technician_id: Optional[uuid.UUID] = None


class ServiceResponse(CamelModel):
    id: uuid.UUID
    customer_id: uuid.UUID
    technician_id: Optional[uuid.UUID] = None
    title: str
    description: str
    status: ServiceStatus
    priority: ServicePriority
    estimated_cost: Optional[float] = None
    actual_cost: Optional[float] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    customer: Optional[CustomerSummary] = None
    technician: Optional[TechnicianSummary] = None


class ServiceUpdateResponse(CamelModel):
    id: uuid.UUID
    service_id: uuid.UUID
    user_id: uuid.UUID
    message: str
    created_at: datetime


class ServiceEnvelope(CamelModel):
    success: bool = True
    service: ServiceResponse


class ServiceDetailResponse(CamelModel):
    service: ServiceResponse
    updates: list[ServiceUpdateResponse]


class ServiceListResponse(CamelModel):
    services: list[ServiceResponse]


class CustomerDetailResponse(CamelModel):
    customer: CustomerResponse
    services: list[ServiceResponse]


class DashboardStats(CamelModel):
    total_services: int
    active_services: int
    completed_services: int
    cancelled_services: int
    total_customers: int


class DashboardResponse(CamelModel):
    business: BusinessSummary
    services: list[ServiceResponse]
    stats: DashboardStats


class CustomerStats(CamelModel):
    total_customers: int
    customers_with_services: int


class CustomersResponse(CamelModel):
    business: BusinessSummary
    customers: list[CustomerResponse]
    services: list[ServiceResponse]
    stats: CustomerStats
