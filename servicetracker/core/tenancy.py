"""
Tenant resolution: verified identity -> (user, business)
"""

from dataclasses import dataclass
from typing import Optional
import uuid

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
import structlog

from servicetracker.core.errors import TenantNotFound, Unauthenticated
from servicetracker.core.identity import Identity
from servicetracker.models.business import Business
from servicetracker.models.user import User

logger = structlog.get_logger(__name__)

BEARER_PREFIX = "bearer "


@dataclass(frozen=True)
class RequestContext:
    """Scoping context for everything a request reads or writes"""
    identity: Identity
    user: User
    business: Business

    @property
    def business_id(self) -> uuid.UUID:
        return self.business.id


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Pull the token out of an ``Authorization: Bearer <token>`` header"""
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        raise Unauthenticated("No authorization token provided")

    token = authorization[len(BEARER_PREFIX):].strip()
    if not token or " " in token:
        raise Unauthenticated("No authorization token provided")
    return token


class TenantResolver:
    """Maps a verified identity onto exactly one business"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_user(self, identity: Identity) -> Optional[User]:
        """Look up by subject id, falling back to the verified email"""
        result = await self.session.exec(select(User).where(User.id == identity.id))
        user = result.first()
        if user is None and identity.email:
            # Fresh OAuth sign-ins can reach us before the id is persisted
            result = await self.session.exec(select(User).where(User.email == identity.email))
            user = result.first()
        return user

    async def resolve(self, identity: Identity) -> RequestContext:
        user = await self.find_user(identity)
        if user is None:
            logger.warning(f"No user linked to identity {identity.id}")
            raise TenantNotFound("User not found in database")

        business = await self.session.get(Business, user.business_id)
        if business is None:
            logger.warning(f"User {user.id} points at missing business {user.business_id}")
            raise TenantNotFound("Business not found")

        return RequestContext(identity=identity, user=user, business=business)
