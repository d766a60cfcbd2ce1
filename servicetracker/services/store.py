"""
Tenant-scoped data access

Every query issued through ``ScopedStore`` carries the resolved business id.
Rows that belong to another business are indistinguishable from rows that do
not exist.
"""

from typing import Any, Optional, Sequence, Type, TypeVar
import uuid

from sqlalchemy import func
from sqlalchemy.orm import selectinload
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from servicetracker.core.errors import NotFound
from servicetracker.models.service import Service
from servicetracker.models.service_update import ServiceUpdate

ModelT = TypeVar("ModelT", bound=SQLModel)

# Relationships loaded up front; lazy loads are not available under asyncio
EAGER_LOADS = {
    Service: (selectinload(Service.customer), selectinload(Service.technician)),
}


class ScopedStore:
    """CRUD over business-owned tables, filtered by one business id"""

    def __init__(self, session: AsyncSession, business_id: uuid.UUID):
        self.session = session
        self.business_id = business_id

    def _scoped(self, model: Type[ModelT]):
        statement = select(model).where(model.business_id == self.business_id)
        for option in EAGER_LOADS.get(model, ()):
            statement = statement.options(option)
        return statement.execution_options(populate_existing=True)

    async def list(self, model: Type[ModelT], *filters: Any) -> Sequence[ModelT]:
        """All rows of ``model`` in this business, newest first"""
        statement = self._scoped(model).where(*filters).order_by(model.created_at.desc())
        result = await self.session.exec(statement)
        return result.all()

    async def find(self, model: Type[ModelT], *filters: Any) -> Optional[ModelT]:
        statement = self._scoped(model).where(*filters)
        result = await self.session.exec(statement)
        return result.first()

    async def get(self, model: Type[ModelT], entity_id: uuid.UUID) -> ModelT:
        """Fetch by ``(id, business_id)`` or raise NotFound"""
        entity = await self.find(model, model.id == entity_id)
        if entity is None:
            raise NotFound(f"{model.__name__} not found")
        return entity

    async def count(self, model: Type[ModelT], *filters: Any) -> int:
        statement = (
            select(func.count())
            .select_from(model)
            .where(model.business_id == self.business_id, *filters)
        )
        result = await self.session.exec(statement)
        return result.one()

    async def add(self, entity: ModelT) -> ModelT:
        """Stage a new row stamped with this business id"""
        entity.business_id = self.business_id
        self.session.add(entity)
        await self.session.flush()
        return entity

    async def delete(self, entity: ModelT) -> None:
        if entity.business_id != self.business_id:
            raise NotFound(f"{type(entity).__name__} not found")
        await self.session.delete(entity)
        await self.session.flush()

    async def service_updates(self, service_id: uuid.UUID) -> Sequence[ServiceUpdate]:
        """Audit trail of a service, oldest first, scoped through the service"""
        statement = (
            select(ServiceUpdate)
            .join(Service, Service.id == ServiceUpdate.service_id)
            .where(
                ServiceUpdate.service_id == service_id,
                Service.business_id == self.business_id,
            )
            .order_by(ServiceUpdate.created_at.asc())
        )
        result = await self.session.exec(statement)
        return result.all()

    async def append_service_update(
        self, service: Service, user_id: uuid.UUID, message: str
    ) -> ServiceUpdate:
        if service.business_id != self.business_id:
            raise NotFound("Service not found")
        update = ServiceUpdate(service_id=service.id, user_id=user_id, message=message)
        self.session.add(update)
        await self.session.flush()
        return update
