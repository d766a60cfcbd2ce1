"""
ServiceUpdate model - append-only audit trail of a service
"""

from sqlmodel import Field, SQLModel
from datetime import datetime
import uuid

from servicetracker.models.timestamps import TIMESTAMP, utcnow


class ServiceUpdate(SQLModel, table=True):
    """Immutable log entry written on creation and on every status change"""

    __tablename__ = "service_updates"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    service_id: uuid.UUID = Field(foreign_key="services.id", index=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", index=True, description="Author")
    message: str = Field(nullable=False, max_length=5000)
    created_at: datetime = Field(default_factory=utcnow, sa_type=TIMESTAMP, index=True)
