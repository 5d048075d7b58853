"""Dashboard endpoint - activity summary and daily goal."""
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query

from app.database import get_database
from app.models.dashboard import Dashboard
from app.routers.auth import get_current_user_id
from app.services.dashboard_service import DashboardService


router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=Dashboard)
async def get_dashboard(
    now: Optional[datetime] = Query(None, description="Reference instant (defaults to now)"),
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Period totals, 30-day stats, most active project/location and goal progress.
    """
    service = DashboardService(db)
    return await service.get_dashboard(user_id=user_id, now=now)
