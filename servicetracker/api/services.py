"""
Service ticket API endpoints
"""

from fastapi import APIRouter, Depends, status
import uuid

from servicetracker.core.dependencies import get_lifecycle_manager
from servicetracker.schemas.base import ErrorResponse
from servicetracker.schemas.service import (
    ServiceCreate,
    ServiceDetailResponse,
    ServiceEnvelope,
    ServiceListResponse,
    ServiceResponse,
    ServiceStatusUpdate,
    ServiceUpdateResponse,
    TechnicianAssignment,
)
from servicetracker.services.lifecycle import ServiceLifecycleManager, ServiceRequest

router = APIRouter(
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    }
)


@router.get("", response_model=ServiceListResponse)
async def list_services(
    manager: ServiceLifecycleManager = Depends(get_lifecycle_manager),
):
    """List the business's services, newest first"""
    services = await manager.list_services()
    return ServiceListResponse(
        services=[ServiceResponse.model_validate(service) for service in services]
    )


@router.post(
    "/create",
    response_model=ServiceEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_service(
    service_data: ServiceCreate,
    manager: ServiceLifecycleManager = Depends(get_lifecycle_manager),
):
    """Create a service ticket, creating the customer on first contact

    Rules:
    - title, description, customerName and customerEmail are required
    - an existing customer with the same email is reused unchanged
    - the ticket starts PENDING with one "created" update
    """
    service = await manager.create_service(
        ServiceRequest(
            title=service_data.title,
            description=service_data.description,
            customer_name=service_data.customer_name,
            customer_email=service_data.customer_email,
            customer_phone=service_data.customer_phone,
            priority=service_data.priority,
        )
    )
    return ServiceEnvelope(service=ServiceResponse.model_validate(service))


@router.get("/{service_id}", response_model=ServiceDetailResponse)
async def get_service(
    service_id: uuid.UUID,
    manager: ServiceLifecycleManager = Depends(get_lifecycle_manager),
):
    """Get a service with its update history"""
    service = await manager.get_service(service_id)
    updates = await manager.get_updates(service_id)
    return ServiceDetailResponse(
        service=ServiceResponse.model_validate(service),
        updates=[ServiceUpdateResponse.model_validate(update) for update in updates],
    )


@router.api_route(
    "/{service_id}",
    methods=["PATCH", "PUT"],
    response_model=ServiceEnvelope,
    responses={400: {"model": ErrorResponse}},
)
async def update_service_status(
    service_id: uuid.UUID,
    status_data: ServiceStatusUpdate,
    manager: ServiceLifecycleManager = Depends(get_lifecycle_manager),
):
    """Change a service's status, optionally with notes"""
    service = await manager.update_status(service_id, status_data.status, status_data.notes)
    return ServiceEnvelope(service=ServiceResponse.model_validate(service))


@router.patch("/{service_id}/technician", response_model=ServiceEnvelope)
async def assign_technician(
    service_id: uuid.UUID,
    assignment: TechnicianAssignment,
    manager: ServiceLifecycleManager = Depends(get_lifecycle_manager),
):
    """Assign (or with null, unassign) a technician from the same business"""
    service = await manager.assign_technician(service_id, assignment.technician_id)
    return ServiceEnvelope(service=ServiceResponse.model_validate(service))
