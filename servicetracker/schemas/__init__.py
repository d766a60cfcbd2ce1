"""
Schemas module
"""

from servicetracker.schemas.base import CamelModel, ErrorResponse, MessageResponse
from servicetracker.schemas.customer import (
    CustomerEnvelope,
    CustomerResponse,
    CustomerSummary,
    CustomerUpdatedResponse,
    CustomerWrite,
)
from servicetracker.schemas.service import (
    CustomerDetailResponse,
    CustomersResponse,
    DashboardResponse,
    ServiceCreate,
    ServiceDetailResponse,
    ServiceEnvelope,
    ServiceListResponse,
    ServiceResponse,
    ServiceStatusUpdate,
    ServiceUpdateResponse,
    TechnicianAssignment,
)
from servicetracker.schemas.user import (
    BusinessResponse,
    OnboardingCreate,
    OnboardingResponse,
    UserBusinessResponse,
    UserCheckResponse,
    UserResponse,
)

__all__ = [
    "BusinessResponse",
    "CamelModel",
    "CustomerDetailResponse",
    "CustomerEnvelope",
    "CustomerResponse",
    "CustomerSummary",
    "CustomerUpdatedResponse",
    "CustomerWrite",
    "CustomersResponse",
    "DashboardResponse",
    "ErrorResponse",
    "MessageResponse",
    "OnboardingCreate",
    "OnboardingResponse",
    "ServiceCreate",
    "ServiceDetailResponse",
    "ServiceEnvelope",
    "ServiceListResponse",
    "ServiceResponse",
    "ServiceStatusUpdate",
    "ServiceUpdateResponse",
    "TechnicianAssignment",
    "UserBusinessResponse",
    "UserCheckResponse",
    "UserResponse",
]
