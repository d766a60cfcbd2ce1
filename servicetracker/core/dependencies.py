"""
Authentication and tenant-scoping dependencies for FastAPI
"""

from typing import Optional

from fastapi import Depends, Header, Request
from sqlmodel.ext.asyncio.session import AsyncSession
import structlog

from servicetracker.core.config import Settings
from servicetracker.core.database import get_session
from servicetracker.core.identity import Identity, IdentityVerifier
from servicetracker.core.tenancy import RequestContext, TenantResolver, extract_bearer_token
from servicetracker.services.customers import CustomerRegistry
from servicetracker.services.lifecycle import ServiceLifecycleManager
from servicetracker.services.store import ScopedStore

logger = structlog.get_logger(__name__)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_identity_verifier(request: Request) -> IdentityVerifier:
    return request.app.state.identity_verifier


async def get_identity(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> Identity:
    """Verify the bearer token once per request"""
    cached = getattr(request.state, "identity", None)
    if cached is not None:
        return cached

    token = extract_bearer_token(authorization)
    identity = await verifier.verify(token)
    request.state.identity = identity
    logger.debug(f"Identity verified: {identity.id}")
    return identity


async def get_request_context(
    request: Request,
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(get_session),
) -> RequestContext:
    """Resolve the caller's business; the only source of a business id"""
    cached = getattr(request.state, "context", None)
    if cached is not None:
        return cached

    context = await TenantResolver(session).resolve(identity)
    request.state.context = context
    return context


def get_scoped_store(
    context: RequestContext = Depends(get_request_context),
    session: AsyncSession = Depends(get_session),
) -> ScopedStore:
    return ScopedStore(session, context.business_id)


def get_customer_registry(
    store: ScopedStore = Depends(get_scoped_store),
) -> CustomerRegistry:
    return CustomerRegistry(store)


def get_lifecycle_manager(
    context: RequestContext = Depends(get_request_context),
    store: ScopedStore = Depends(get_scoped_store),
    settings: Settings = Depends(get_app_settings),
) -> ServiceLifecycleManager:
    return ServiceLifecycleManager(
        store,
        actor_id=context.user.id,
        strict_transitions=settings.STRICT_STATUS_TRANSITIONS,
    )
