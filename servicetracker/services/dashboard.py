"""
Aggregate read views for the dashboard and customer pages
"""

from dataclasses import dataclass
from typing import Sequence

from servicetracker.models.customer import Customer
from servicetracker.models.service import Service, ServiceStatus
from servicetracker.services.store import ScopedStore

ACTIVE_STATUSES = (ServiceStatus.PENDING, ServiceStatus.IN_PROGRESS)


@dataclass
class ServiceStats:
    total_services: int
    active_services: int
    completed_services: int
    cancelled_services: int
    total_customers: int


@dataclass
class CustomerStats:
    total_customers: int
    customers_with_services: int


def summarize_services(services: Sequence[Service]) -> ServiceStats:
    return ServiceStats(
        total_services=len(services),
        active_services=sum(1 for s in services if s.status in ACTIVE_STATUSES),
        completed_services=sum(1 for s in services if s.status == ServiceStatus.COMPLETED),
        cancelled_services=sum(1 for s in services if s.status == ServiceStatus.CANCELLED),
        total_customers=len({s.customer_id for s in services}),
    )


def summarize_customers(customers: Sequence[Customer], services: Sequence[Service]) -> CustomerStats:
    return CustomerStats(
        total_customers=len({c.email for c in customers}),
        customers_with_services=len({s.customer_id for s in services}),
    )


class DashboardService:
    """Read-only views over one business"""

    def __init__(self, store: ScopedStore):
        self.store = store

    async def overview(self) -> tuple[Sequence[Service], ServiceStats]:
        services = await self.store.list(Service)
        return services, summarize_services(services)

    async def customers_overview(self) -> tuple[Sequence[Customer], Sequence[Service], CustomerStats]:
        customers = await self.store.list(Customer)
        services = await self.store.list(Service)
        return customers, services, summarize_customers(customers, services)
