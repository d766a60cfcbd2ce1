"""
Customer API endpoints
"""

from fastapi import APIRouter, Depends, status
import uuid

from servicetracker.core.dependencies import get_customer_registry, get_request_context, get_scoped_store
from servicetracker.core.tenancy import RequestContext
from servicetracker.schemas.base import ErrorResponse, MessageResponse
from servicetracker.schemas.customer import (
    CustomerEnvelope,
    CustomerResponse,
    CustomerUpdatedResponse,
    CustomerWrite,
)
from servicetracker.schemas.service import (
    CustomerDetailResponse,
    CustomersResponse,
    CustomerStats,
    ServiceResponse,
)
from servicetracker.schemas.user import BusinessSummary
from servicetracker.services.customers import CustomerData, CustomerRegistry
from servicetracker.services.dashboard import DashboardService
from servicetracker.services.store import ScopedStore

router = APIRouter(
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    }
)


def _customer_data(body: CustomerWrite) -> CustomerData:
    return CustomerData(
        name=body.name,
        email=body.email,
        phone=body.phone,
        address=body.address,
        notes=body.notes,
    )


@router.get("", response_model=CustomersResponse)
async def list_customers(
    context: RequestContext = Depends(get_request_context),
    store: ScopedStore = Depends(get_scoped_store),
):
    """Customers and services of the business, with customer counts"""
    customers, services, stats = await DashboardService(store).customers_overview()
    return CustomersResponse(
        business=BusinessSummary.model_validate(context.business),
        customers=[CustomerResponse.model_validate(customer) for customer in customers],
        services=[ServiceResponse.model_validate(service) for service in services],
        stats=CustomerStats.model_validate(stats),
    )


@router.post(
    "/create",
    response_model=CustomerEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_customer(
    customer_data: CustomerWrite,
    registry: CustomerRegistry = Depends(get_customer_registry),
):
    """Create a customer; the email must be new to this business"""
    customer = await registry.create(_customer_data(customer_data))
    return CustomerEnvelope(customer=CustomerResponse.model_validate(customer))


@router.get("/{customer_id}", response_model=CustomerDetailResponse)
async def get_customer(
    customer_id: uuid.UUID,
    registry: CustomerRegistry = Depends(get_customer_registry),
):
    """Get a customer with their services"""
    customer = await registry.get(customer_id)
    services = await registry.services_for(customer)
    return CustomerDetailResponse(
        customer=CustomerResponse.model_validate(customer),
        services=[ServiceResponse.model_validate(service) for service in services],
    )


@router.patch(
    "/{customer_id}",
    response_model=CustomerUpdatedResponse,
    responses={400: {"model": ErrorResponse}},
)
async def update_customer(
    customer_id: uuid.UUID,
    customer_data: CustomerWrite,
    registry: CustomerRegistry = Depends(get_customer_registry),
):
    """Update a customer"""
    customer = await registry.update(customer_id, _customer_data(customer_data))
    return CustomerUpdatedResponse(customer=CustomerResponse.model_validate(customer))


@router.delete(
    "/{customer_id}",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}},
)
async def delete_customer(
    customer_id: uuid.UUID,
    registry: CustomerRegistry = Depends(get_customer_registry),
):
    """Delete a customer that has no services"""
    await registry.delete(customer_id)
    return MessageResponse(message="Customer deleted successfully")
