"""
Stats Service - Overview figures for the admin dashboard
"""
from collections import Counter
from typing import Iterable

from wastewatch.models.report import Priority, Report, ReportStatus, WasteType
from wastewatch.schemas import DashboardStats
from wastewatch.services.report_query import total_credits
from wastewatch.services.staff_directory import StaffDirectory


def build_dashboard_stats(
    reports: Iterable[Report], directory: StaffDirectory, top_staff: int = 5
) -> DashboardStats:
    reports = list(reports)
    by_status = Counter(r.status for r in reports)
    by_type = Counter(r.waste_type for r in reports)
    
    return DashboardStats(
        total=len(reports),
        pending=by_status[ReportStatus.PENDING],
        assigned=by_status[ReportStatus.ASSIGNED],
        in_progress=by_status[ReportStatus.IN_PROGRESS],
        resolved=by_status[ReportStatus.RESOLVED],
        critical=sum(1 for r in reports if r.priority == Priority.CRITICAL),
        # Every waste type is listed, including empty ones
        by_waste_type={t.value: by_type[t] for t in WasteType},
        total_credits=total_credits(reports),
        top_staff=directory.leaderboard(top_staff),
    )
