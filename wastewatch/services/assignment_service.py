"""
Assignment Service - Picks and assigns cleanup staff for reports
"""
import logging
from typing import Iterable, Optional, Tuple

from wastewatch.exceptions import StaffNotFoundError
from wastewatch.models.report import Report
from wastewatch.models.staff import StaffMember
from wastewatch.services.report_service import ReportStore
from wastewatch.services.staff_directory import StaffDirectory

logger = logging.getLogger(__name__)


def is_eligible(member: StaffMember) -> bool:
    """Active and below capacity"""
    return member.active and member.has_capacity


def select_best_staff(staff: Iterable[StaffMember]) -> Optional[StaffMember]:
    """
    Pick the least-loaded eligible member, preferring the higher rating on
    equal load. Returns None when nobody is eligible. Reads ``active_tasks``
    as given and never changes it.
    """
    candidates = [m for m in staff if is_eligible(m)]
    if not candidates:
        return None
    return min(candidates, key=lambda m: (m.workload_ratio, -m.rating))


class AssignmentService:
    """Applies manual and automatic assignments to the report store"""
    
    def __init__(self, store: ReportStore, directory: StaffDirectory):
        self.store = store
        self.directory = directory
    
    def best_available(self) -> Optional[StaffMember]:
        return select_best_staff(self.directory.list_staff())
    
    async def assign(self, report_id: str, staff_id: str) -> Optional[Tuple[Report, StaffMember]]:
        """Assign a chosen staff member; returns None when the report is unknown"""
        member = self.directory.get(staff_id)
        if not member:
            raise StaffNotFoundError(staff_id)
        
        report = await self.store.assign(report_id, member.id)
        if not report:
            return None
        
        logger.info("Report %s assigned to %s", report_id, member.name)
        return report, member
    
    async def auto_assign(self, report_id: str) -> Optional[Tuple[Report, StaffMember]]:
        """
        Assign the best available staff member.
        Returns None when the report is unknown or no staff member is eligible.
        """
        if not self.store.get_report(report_id):
            return None
        
        member = self.best_available()
        if not member:
            logger.warning("No eligible staff for report %s", report_id)
            return None
        
        report = await self.store.assign(report_id, member.id)
        if not report:
            return None
        
        logger.info(
            "Report %s auto-assigned to %s (workload %d%%, rating %.1f)",
            report_id, member.name, member.workload_percent, member.rating,
        )
        return report, member
