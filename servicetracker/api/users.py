"""
User account and onboarding API endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from servicetracker.core.config import Settings
from servicetracker.core.database import get_session
from servicetracker.core.dependencies import get_app_settings, get_identity, get_request_context
from servicetracker.core.identity import Identity
from servicetracker.core.tenancy import RequestContext, TenantResolver
from servicetracker.models.business import Business
from servicetracker.schemas.base import ErrorResponse
from servicetracker.schemas.user import (
    AuthUser,
    BusinessResponse,
    OnboardingCreate,
    OnboardingResponse,
    UserBusinessResponse,
    UserCheckResponse,
    UserResponse,
)
from servicetracker.services.onboarding import OnboardingRequest, OnboardingService

router = APIRouter(responses={401: {"model": ErrorResponse}})


@router.post(
    "/business",
    response_model=OnboardingResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_business(
    onboarding_data: OnboardingCreate,
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    """Create the business and admin user for a newly authenticated identity"""
    service = OnboardingService(
        session,
        default_plan=settings.DEFAULT_BUSINESS_PLAN,
        max_subdomain_attempts=settings.SUBDOMAIN_MAX_ATTEMPTS,
    )
    user, business = await service.onboard(
        identity,
        OnboardingRequest(
            business_name=onboarding_data.business_name,
            business_type=onboarding_data.business_type,
            team_size=onboarding_data.team_size,
            primary_goal=onboarding_data.primary_goal,
            brand_colors=onboarding_data.brand_colors or {},
            user_name=onboarding_data.user_name,
            logo_url=onboarding_data.logo_url,
        ),
    )
    return OnboardingResponse(
        user=UserResponse.model_validate(user),
        business=BusinessResponse.model_validate(business),
    )


@router.get(
    "/business",
    response_model=UserBusinessResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_user_business(
    context: RequestContext = Depends(get_request_context),
):
    """The caller's user record and business"""
    return UserBusinessResponse(
        user=UserResponse.model_validate(context.user),
        business=BusinessResponse.model_validate(context.business),
    )


@router.get("/check", response_model=UserCheckResponse)
async def check_user(
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(get_session),
):
    """Whether the identity has finished onboarding; never 404s"""
    user = await TenantResolver(session).find_user(identity)
    business = await session.get(Business, user.business_id) if user else None

    return UserCheckResponse(
        exists=user is not None,
        user=UserResponse.model_validate(user) if user else None,
        business=BusinessResponse.model_validate(business) if business else None,
        auth_user=AuthUser(id=identity.id, email=identity.email, name=identity.name),
    )
