"""
Tests for dashboard and customer-page aggregates
"""

import pytest
import uuid

from servicetracker.models import Customer, Service, ServiceStatus
from servicetracker.services.customers import CustomerData, CustomerRegistry
from servicetracker.services.dashboard import (
    DashboardService,
    summarize_customers,
    summarize_services,
)
from servicetracker.services.lifecycle import ServiceLifecycleManager, ServiceRequest
from servicetracker.services.store import ScopedStore


def _service(customer_id, status) -> Service:
    return Service(
        business_id=uuid.uuid4(),
        customer_id=customer_id,
        title="Job",
        description="Job",
        status=status,
    )


def test_summarize_services():
    alice, bob = uuid.uuid4(), uuid.uuid4()
    services = [
        _service(alice, ServiceStatus.PENDING),
        _service(alice, ServiceStatus.IN_PROGRESS),
        _service(bob, ServiceStatus.COMPLETED),
        _service(bob, ServiceStatus.CANCELLED),
        _service(bob, ServiceStatus.COMPLETED),
    ]

    stats = summarize_services(services)

    assert stats.total_services == 5
    assert stats.active_services == 2
    assert stats.completed_services == 2
    assert stats.cancelled_services == 1
    assert stats.total_customers == 2


def test_summarize_services_empty():
    stats = summarize_services([])
    assert stats.total_services == 0
    assert stats.active_services == 0


def test_summarize_customers():
    business_id = uuid.uuid4()
    customers = [
        Customer(id=uuid.uuid4(), business_id=business_id, name="A", email="a@example.com"),
        Customer(id=uuid.uuid4(), business_id=business_id, name="B", email="b@example.com"),
        Customer(id=uuid.uuid4(), business_id=business_id, name="C", email="c@example.com"),
    ]
    services = [
        _service(customers[0].id, ServiceStatus.PENDING),
        _service(customers[0].id, ServiceStatus.COMPLETED),
    ]

    stats = summarize_customers(customers, services)

    assert stats.total_customers == 3
    assert stats.customers_with_services == 1


@pytest.mark.asyncio
async def test_overview_is_scoped_to_business(session, make_tenant):
    business_a, user_a = await make_tenant("Alpha")
    business_b, _ = await make_tenant("Beta")
    store_a = ScopedStore(session, business_a)
    manager = ServiceLifecycleManager(store_a, actor_id=user_a)
    await manager.create_service(
        ServiceRequest(
            title="Fix sink",
            description="Blocked",
            customer_name="Jane",
            customer_email="jane@example.com",
        )
    )
    await CustomerRegistry(store_a).create(CustomerData(name="Sam", email="sam@example.com"))

    services, stats = await DashboardService(store_a).overview()
    assert len(services) == 1
    assert stats.active_services == 1
    assert stats.total_customers == 1

    customers, services, customer_stats = await DashboardService(store_a).customers_overview()
    assert len(customers) == 2
    assert customer_stats.total_customers == 2
    assert customer_stats.customers_with_services == 1

    services, stats = await DashboardService(ScopedStore(session, business_b)).overview()
    assert services == []
    assert stats.total_services == 0
