"""
Dashboard API endpoint (staff)
"""
from fastapi import APIRouter, Depends

from coffee_pos.api.deps import get_current_staff, get_dashboard_service
from coffee_pos.schemas.dashboard import DashboardStats
from coffee_pos.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["dashboard"], dependencies=[Depends(get_current_staff)])


@router.get("/stats", response_model=DashboardStats, summary="Today's stats")
def get_stats(service: DashboardService = Depends(get_dashboard_service)):
    """Today's order count, sales, pending and completed deliveries, and recent orders"""
    return service.get_stats()
