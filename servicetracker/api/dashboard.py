"""
Dashboard API endpoint
"""

from fastapi import APIRouter, Depends

from servicetracker.core.dependencies import get_request_context, get_scoped_store
from servicetracker.core.tenancy import RequestContext
from servicetracker.schemas.base import ErrorResponse
from servicetracker.schemas.service import DashboardResponse, DashboardStats, ServiceResponse
from servicetracker.schemas.user import BusinessSummary
from servicetracker.services.dashboard import DashboardService
from servicetracker.services.store import ScopedStore

router = APIRouter(
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    }
)


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    context: RequestContext = Depends(get_request_context),
    store: ScopedStore = Depends(get_scoped_store),
):
    """Recent services and headline counts for the business"""
    services, stats = await DashboardService(store).overview()
    return DashboardResponse(
        business=BusinessSummary.model_validate(context.business),
        services=[ServiceResponse.model_validate(service) for service in services],
        stats=DashboardStats.model_validate(stats),
    )
