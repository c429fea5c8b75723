"""
Dashboard API endpoint with global listing metrics.
"""

from fastapi import APIRouter, Depends
from property_desk.services.dashboard import DashboardService
from property_desk.schemas.dashboard import DashboardResponse
from property_desk.schemas.error import COMMON_ERROR_RESPONSES
from property_desk.utils.auth import TokenPayload
from property_desk.utils.dependencies import get_current_user, get_dashboard_service


router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get(
    "",
    response_model=DashboardResponse,
    summary="Dashboard metrics",
    description="Counts of non-deleted properties by status and the five newest titles",
    responses=COMMON_ERROR_RESPONSES
)
async def get_dashboard(
    current_user: TokenPayload = Depends(get_current_user),
    dashboard_service: DashboardService = Depends(get_dashboard_service)
) -> DashboardResponse:
    summary = await dashboard_service.get_summary()
    return DashboardResponse(**summary)
