"""
Service ticket model with its status state machine
"""

from sqlmodel import Field, SQLModel, Relationship
from datetime import datetime
from decimal import Decimal
from typing import Optional, TYPE_CHECKING
from enum import Enum
import uuid

from servicetracker.models.timestamps import TIMESTAMP, utcnow

if TYPE_CHECKING:
    from servicetracker.models.customer import Customer
    from servicetracker.models.user import User


class ServiceStatus(str, Enum):
    """Status of a service ticket"""
    PENDING = "PENDING"             # Requested, nobody working on it yet
    IN_PROGRESS = "IN_PROGRESS"     # Technician is on it
    COMPLETED = "COMPLETED"         # Work done (terminal)
    CANCELLED = "CANCELLED"         # Abandoned before completion (terminal)


class ServicePriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


STATUS_TRANSITIONS: dict[ServiceStatus, frozenset[ServiceStatus]] = {
    ServiceStatus.PENDING: frozenset({ServiceStatus.IN_PROGRESS, ServiceStatus.CANCELLED}),
    ServiceStatus.IN_PROGRESS: frozenset({ServiceStatus.COMPLETED, ServiceStatus.CANCELLED}),
    ServiceStatus.COMPLETED: frozenset(),
    ServiceStatus.CANCELLED: frozenset(),
}


class Service(SQLModel, table=True):
    """Unit of work requested by a customer"""

    __tablename__ = "services"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    business_id: uuid.UUID = Field(
        foreign_key="businesses.id",
        index=True,
        description="Business ID for multi-tenant isolation"
    )
    customer_id: uuid.UUID = Field(foreign_key="customers.id", index=True)
    technician_id: Optional[uuid.UUID] = Field(
        default=None,
        foreign_key="users.id",
        index=True,
        description="Assigned technician, always a user of the same business"
    )

    title: str = Field(nullable=False, max_length=255)
    description: str = Field(nullable=False, max_length=5000)
    status: ServiceStatus = Field(default=ServiceStatus.PENDING, index=True)
    priority: ServicePriority = Field(default=ServicePriority.MEDIUM)

    estimated_cost: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)
    actual_cost: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_type=TIMESTAMP, index=True)
    updated_at: Optional[datetime] = Field(default=None, sa_type=TIMESTAMP)

    # Relationships (always eager-loaded by the scoped store)
    customer: Optional["Customer"] = Relationship()
    technician: Optional["User"] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "Service.technician_id"}
    )

    # State machine methods
    def is_terminal(self) -> bool:
        return not STATUS_TRANSITIONS[self.status]

    def can_transition_to(self, new_status: ServiceStatus) -> bool:
        """Check the transition graph; a same-status move is not an edge"""
        return new_status in STATUS_TRANSITIONS[self.status]

    def transition_to(self, new_status: ServiceStatus, strict: bool = False) -> ServiceStatus:
        """Move to ``new_status`` and return the previous status

        In permissive mode any recognized status is accepted, matching the
        dashboard's manual-correction workflow.
        """
        if strict and not self.can_transition_to(new_status):
            raise ValueError(
                f"Cannot transition from {self.status.value} to {new_status.value}"
            )

        previous = self.status
        self.status = new_status
        self.updated_at = utcnow()
        return previous
