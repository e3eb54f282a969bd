"""
Report Query - Read-side filtering, searching and ordering of reports

Every function returns a new list and leaves its input untouched.
"""
from typing import Iterable, List, Optional, Union

from wastewatch.models.report import PRIORITY_RANK, Priority, Report, ReportStatus
from wastewatch.schemas import ReportQuery, SortOrder

ALL = "all"

# Statuses that count as open work for cleanup staff
ACTIVE_TASK_STATUSES = (ReportStatus.ASSIGNED, ReportStatus.IN_PROGRESS)


def filter_by_status(
    reports: Iterable[Report], status: Union[ReportStatus, str, None]
) -> List[Report]:
    """Keep reports with exactly this status; "all" or None keeps everything"""
    if status is None or status == ALL:
        return list(reports)
    status = ReportStatus(status)
    return [r for r in reports if r.status == status]


def filter_by_priority(
    reports: Iterable[Report], priority: Union[Priority, str, None]
) -> List[Report]:
    """Keep reports with exactly this priority; "all" or None keeps everything"""
    if priority is None or priority == ALL:
        return list(reports)
    priority = Priority(priority)
    return [r for r in reports if r.priority == priority]


def matches_search(report: Report, query: str) -> bool:
    """
    Case-insensitive substring match on title, address and waste type.
    The id is matched as-is.
    """
    needle = query.lower()
    return (
        needle in report.title.lower()
        or needle in report.address.lower()
        or needle in report.waste_type.value.lower()
        or query in report.id
    )


def search_reports(reports: Iterable[Report], query: Optional[str]) -> List[Report]:
    """Keep reports matching the free-text query; empty query keeps everything"""
    if not query:
        return list(reports)
    return [r for r in reports if matches_search(r, query)]


def sort_reports(reports: Iterable[Report], order: Union[SortOrder, str]) -> List[Report]:
    """Stable sort by creation time or priority rank"""
    order = SortOrder(order)
    if order == SortOrder.NEWEST:
        return sorted(reports, key=lambda r: r.created_at, reverse=True)
    if order == SortOrder.OLDEST:
        return sorted(reports, key=lambda r: r.created_at)
    return sorted(reports, key=lambda r: PRIORITY_RANK[r.priority])


def query_reports(reports: Iterable[Report], query: Optional[ReportQuery] = None) -> List[Report]:
    """Apply status, priority and search filters, then sort"""
    query = query or ReportQuery()
    result = filter_by_status(reports, query.status)
    result = filter_by_priority(result, query.priority)
    result = search_reports(result, query.search)
    return sort_reports(result, query.sort)


def active_tasks(reports: Iterable[Report], staff_id: Optional[str] = None) -> List[Report]:
    """Assigned or in-progress reports, optionally for one staff member"""
    return [
        r for r in reports
        if r.status in ACTIVE_TASK_STATUSES
        and (staff_id is None or r.assigned_to == staff_id)
    ]


def total_credits(reports: Iterable[Report]) -> int:
    """Sum of credits earned over the given reports"""
    return sum(r.credits_earned for r in reports)
