"""
Service lifecycle - ticket creation, status changes and the audit trail

Every successful creation or status change appends exactly one
ServiceUpdate, in the same transaction as the change it records.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Union
import uuid

import structlog

from servicetracker.core.database import transaction
from servicetracker.core.errors import InvalidTransition, NotFound, ValidationError
from servicetracker.models.service import Service, ServicePriority, ServiceStatus
from servicetracker.models.service_update import ServiceUpdate
from servicetracker.models.timestamps import utcnow
from servicetracker.models.user import User
from servicetracker.services.customers import CustomerRegistry
from servicetracker.services.store import ScopedStore
from servicetracker.services.validation import blank, is_valid_email

logger = structlog.get_logger(__name__)

VALID_STATUSES = [status.value for status in ServiceStatus]
VALID_PRIORITIES = [priority.value for priority in ServicePriority]


@dataclass
class ServiceRequest:
    """A new service ticket as submitted from the dashboard"""
    title: Optional[str]
    description: Optional[str]
    customer_name: Optional[str]
    customer_email: Optional[str]
    customer_phone: Optional[str] = None
    priority: Union[ServicePriority, str, None] = ServicePriority.MEDIUM


def parse_status(value: Union[ServiceStatus, str, None]) -> ServiceStatus:
    if blank(value):
        raise ValidationError("Missing required field: status")
    try:
        return ServiceStatus(value)
    except ValueError:
        raise ValidationError(
            "Invalid status. Must be one of: " + ", ".join(VALID_STATUSES)
        )


def parse_priority(value: Union[ServicePriority, str, None]) -> ServicePriority:
    if blank(value):
        return ServicePriority.MEDIUM
    try:
        return ServicePriority(value)
    except ValueError:
        raise ValidationError(
            "Invalid priority. Must be one of: " + ", ".join(VALID_PRIORITIES)
        )


def status_change_message(
    old_status: ServiceStatus, new_status: ServiceStatus, notes: Optional[str] = None
) -> str:
    message = f"Status changed from {old_status.value} to {new_status.value}"
    if not blank(notes):
        message = f"{message}. Notes: {notes.strip()}"
    return message


class ServiceLifecycleManager:
    """Service ticket operations on behalf of one user of one business"""

    def __init__(
        self,
        store: ScopedStore,
        actor_id: uuid.UUID,
        strict_transitions: bool = False,
    ):
        self.store = store
        self.actor_id = actor_id
        self.strict_transitions = strict_transitions
        self.customers = CustomerRegistry(store)

    @property
    def session(self):
        return self.store.session

    async def list_services(self) -> Sequence[Service]:
        return await self.store.list(Service)

    async def get_service(self, service_id: uuid.UUID) -> Service:
        return await self.store.get(Service, service_id)

    async def get_updates(self, service_id: uuid.UUID) -> Sequence[ServiceUpdate]:
        await self.store.get(Service, service_id)
        return await self.store.service_updates(service_id)

    async def create_service(self, request: ServiceRequest) -> Service:
        """Resolve or create the customer, open the ticket, log its creation"""
        if (
            blank(request.title)
            or blank(request.description)
            or blank(request.customer_name)
            or blank(request.customer_email)
        ):
            raise ValidationError(
                "Missing required fields: title, description, customerName, customerEmail"
            )
        if not is_valid_email(request.customer_email.strip()):
            raise ValidationError("Invalid email format")
        priority = parse_priority(request.priority)
        title = request.title.strip()

        async with transaction(self.session):
            customer = await self.customers.find_or_create(
                name=request.customer_name,
                email=request.customer_email,
                phone=request.customer_phone,
            )
            service = await self.store.add(
                Service(
                    business_id=self.store.business_id,
                    customer_id=customer.id,
                    title=title,
                    description=request.description.strip(),
                    status=ServiceStatus.PENDING,
                    priority=priority,
                )
            )
            await self.store.append_service_update(
                service, self.actor_id, f"Service request created: {title}"
            )
            service_id = service.id

        logger.info(f"Service created: {service_id} for customer {customer.id}")
        return await self.get_service(service_id)

    async def update_status(
        self,
        service_id: uuid.UUID,
        new_status: Union[ServiceStatus, str, None],
        notes: Optional[str] = None,
    ) -> Service:
        """Change a ticket's status and record the change"""
        target = parse_status(new_status)

        async with transaction(self.session):
            service = await self.store.get(Service, service_id)
            try:
                previous = service.transition_to(target, strict=self.strict_transitions)
            except ValueError as exc:
                raise InvalidTransition(str(exc)) from exc

            self.session.add(service)
            await self.store.append_service_update(
                service, self.actor_id, status_change_message(previous, target, notes)
            )

        logger.info(
            f"Service {service_id} status changed from {previous.value} to {target.value}"
        )
        return await self.get_service(service_id)

    async def assign_technician(
        self, service_id: uuid.UUID, technician_id: Optional[uuid.UUID]
    ) -> Service:
        """Assign a user of the same business, or unassign with None"""
        async with transaction(self.session):
            service = await self.store.get(Service, service_id)
            if technician_id is not None:
                technician = await self.store.find(User, User.id == technician_id)
                if technician is None:
                    raise NotFound("Technician not found")

            service.technician_id = technician_id
            service.updated_at = utcnow()
            self.session.add(service)
            await self.session.flush()

        logger.info(f"Service {service_id} assigned to technician {technician_id}")
        return await self.get_service(service_id)
