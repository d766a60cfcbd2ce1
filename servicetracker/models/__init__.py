from servicetracker.models.business import Business
from servicetracker.models.user import User, UserRole
from servicetracker.models.customer import Customer
from servicetracker.models.service import (
    Service,
    ServicePriority,
    ServiceStatus,
    STATUS_TRANSITIONS,
)
from servicetracker.models.service_update import ServiceUpdate
