"""
Customer registry - customers deduplicated by email within a business
"""

from dataclasses import dataclass
from typing import Optional, Sequence
import uuid

from sqlalchemy.exc import IntegrityError
import structlog

from servicetracker.core.database import transaction
from servicetracker.core.errors import Conflict, ValidationError
from servicetracker.models.customer import Customer
from servicetracker.models.service import Service
from servicetracker.models.timestamps import utcnow
from servicetracker.services.store import ScopedStore
from servicetracker.services.validation import blank, is_valid_email, normalize_optional

logger = structlog.get_logger(__name__)


@dataclass
class CustomerData:
    name: Optional[str]
    email: Optional[str]
    phone: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None


class CustomerRegistry:
    """Customer operations for the store's business"""

    def __init__(self, store: ScopedStore):
        self.store = store

    @property
    def session(self):
        return self.store.session

    @staticmethod
    def _validate(data: CustomerData, missing_message: str) -> None:
        if blank(data.name) or blank(data.email):
            raise ValidationError(missing_message)
        if not is_valid_email(data.email.strip()):
            raise ValidationError("Invalid email format")

    async def list(self) -> Sequence[Customer]:
        return await self.store.list(Customer)

    async def get(self, customer_id: uuid.UUID) -> Customer:
        return await self.store.get(Customer, customer_id)

    async def services_for(self, customer: Customer) -> Sequence[Service]:
        return await self.store.list(Service, Service.customer_id == customer.id)

    async def find_by_email(self, email: str) -> Optional[Customer]:
        return await self.store.find(Customer, Customer.email == email.strip())

    async def _insert(self, customer: Customer) -> Optional[Customer]:
        """Insert inside a savepoint; None if (business, email) is already taken"""
        try:
            async with self.session.begin_nested():
                await self.store.add(customer)
        except IntegrityError:
            return None
        return customer

    async def find_or_create(
        self,
        name: str,
        email: str,
        phone: Optional[str] = None,
    ) -> Customer:
        """Return the customer with this email, creating it if needed

        An existing customer is returned as stored; the supplied name and
        phone are not applied to it. Runs inside the caller's transaction.
        """
        email = email.strip()
        existing = await self.find_by_email(email)
        if existing is not None:
            return existing

        customer = await self._insert(
            Customer(
                business_id=self.store.business_id,
                name=name.strip(),
                email=email,
                phone=normalize_optional(phone),
            )
        )
        if customer is None:
            # Lost a race with a concurrent insert of the same email
            winner = await self.find_by_email(email)
            if winner is None:
                raise Conflict("A customer with this email already exists")
            return winner

        logger.info(f"Customer created: {customer.id}")
        return customer

    async def create(self, data: CustomerData) -> Customer:
        """Explicit creation; a duplicate email in the business is a conflict"""
        self._validate(data, "Missing required fields: name, email")
        email = data.email.strip()

        async with transaction(self.session):
            if await self.find_by_email(email) is not None:
                raise Conflict("A customer with this email already exists")

            customer = await self._insert(
                Customer(
                    business_id=self.store.business_id,
                    name=data.name.strip(),
                    email=email,
                    phone=normalize_optional(data.phone),
                    address=normalize_optional(data.address),
                    notes=normalize_optional(data.notes),
                )
            )
            if customer is None:
                raise Conflict("A customer with this email already exists")

        logger.info(f"Customer created: {customer.id}")
        return customer

    async def update(self, customer_id: uuid.UUID, data: CustomerData) -> Customer:
        """Replace a customer's fields; optional fields not supplied are cleared"""
        self._validate(data, "Name and email are required")
        email = data.email.strip()

        async with transaction(self.session):
            customer = await self.store.get(Customer, customer_id)

            if email != customer.email:
                duplicate = await self.find_by_email(email)
                if duplicate is not None and duplicate.id != customer.id:
                    raise Conflict("A customer with this email already exists")

            customer.name = data.name.strip()
            customer.email = email
            customer.phone = normalize_optional(data.phone)
            customer.address = normalize_optional(data.address)
            customer.notes = normalize_optional(data.notes)
            customer.updated_at = utcnow()

            self.session.add(customer)
            try:
                await self.session.flush()
            except IntegrityError as exc:
                raise Conflict("A customer with this email already exists") from exc

        logger.info(f"Customer updated: {customer_id}")
        return customer

    async def delete(self, customer_id: uuid.UUID) -> None:
        """Remove a customer that owns no services"""
        async with transaction(self.session):
            customer = await self.store.get(Customer, customer_id)

            service_count = await self.store.count(Service, Service.customer_id == customer.id)
            if service_count > 0:
                raise Conflict("Cannot delete customer with existing services")

            await self.store.delete(customer)

        logger.info(f"Customer deleted: {customer_id}")
