"""Dashboard router for admin overview figures."""
from fastapi import APIRouter, Depends

from wastewatch.dependencies import get_report_store, get_staff_directory
from wastewatch.schemas import DashboardStats
from wastewatch.services.report_service import ReportStore
from wastewatch.services.staff_directory import StaffDirectory
from wastewatch.services.stats_service import build_dashboard_stats

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(
    store: ReportStore = Depends(get_report_store),
    directory: StaffDirectory = Depends(get_staff_directory),
):
    """Report counts by status and waste type plus the staff leaderboard."""
    return build_dashboard_stats(store.reports, directory)
