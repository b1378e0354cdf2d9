import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_api.crud.dashboard import get_dashboard_stats
from attendance_api.dependencies import get_db
from attendance_api.exceptions import StorageError
from attendance_api.schemas.dashboard import DashboardStatsResponse

logger = logging.getLogger(__name__)

dashboard_router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@dashboard_router.get("/stats", response_model=DashboardStatsResponse)
async def dashboard_stats(
        date_from: Optional[str] = Query(None, alias="from", description="YYYY-MM-DD, defaults to start of month"),
        date_to: Optional[str] = Query(None, alias="to", description="YYYY-MM-DD, defaults to end of month"),
        department: Optional[str] = Query(None, description="Department name or 'all'"),
        db: AsyncSession = Depends(get_db)
):
    """
    Attendance totals, daily trend and per-department / per-campus rates.
    """
    logger.info(f"Dashboard stats requested: from={date_from}, to={date_to}, department={department}")

    try:
        stats = await get_dashboard_stats(db, date_from=date_from, date_to=date_to, department=department)
    except SQLAlchemyError as e:
        logger.error(f"Dashboard stats error: {str(e)}", exc_info=True)
        raise StorageError(str(e))

    return DashboardStatsResponse(success=True, data=stats)
