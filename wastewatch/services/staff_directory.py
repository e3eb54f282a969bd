"""
Staff Directory - The roster of cleanup staff
"""
import logging
from typing import Dict, Iterable, List, Optional

from wastewatch.exceptions import StaffNotFoundError
from wastewatch.models.staff import StaffMember

logger = logging.getLogger(__name__)


class StaffDirectory:
    """Holds the seeded staff roster.
    
    Workload figures are owned here. Neither the assignment selector nor the
    report store changes ``active_tasks``; whichever component tracks open
    tasks reports the current count through ``record_workload``.
    """
    
    def __init__(self, members: Iterable[StaffMember]):
        self._members: Dict[str, StaffMember] = {}
        for member in members:
            if member.id in self._members:
                raise ValueError(f"Duplicate staff id {member.id}")
            self._members[member.id] = member
    
    def __len__(self) -> int:
        return len(self._members)
    
    def __contains__(self, staff_id: object) -> bool:
        return staff_id in self._members
    
    def list_staff(self) -> List[StaffMember]:
        """All members in seeding order"""
        return list(self._members.values())
    
    def get(self, staff_id: Optional[str]) -> Optional[StaffMember]:
        """Look up a member; unknown or empty ids read as unassigned"""
        if not staff_id:
            return None
        return self._members.get(staff_id)
    
    def roster(self) -> List[StaffMember]:
        """Active members first, then by rating, best first"""
        return sorted(self._members.values(), key=lambda m: (not m.active, -m.rating))
    
    def leaderboard(self, limit: Optional[int] = None) -> List[StaffMember]:
        """Members ordered by completed tasks, most first"""
        ranked = sorted(self._members.values(), key=lambda m: m.tasks_completed, reverse=True)
        return ranked[:limit] if limit is not None else ranked
    
    @property
    def active_count(self) -> int:
        return sum(1 for m in self._members.values() if m.active)
    
    @property
    def total_completed(self) -> int:
        return sum(m.tasks_completed for m in self._members.values())
    
    @property
    def average_rating(self) -> float:
        """Mean rating rounded to one decimal, 0.0 for an empty roster"""
        if not self._members:
            return 0.0
        return round(sum(m.rating for m in self._members.values()) / len(self._members), 1)
    
    def record_workload(self, staff_id: str, active_tasks: int) -> StaffMember:
        """Replace a member's open-task count with the externally tracked value"""
        member = self._members.get(staff_id)
        if not member:
            raise StaffNotFoundError(staff_id)
        if active_tasks < 0:
            raise ValueError("active_tasks cannot be negative")
        
        updated = member.model_copy(update={"active_tasks": active_tasks})
        self._members[staff_id] = updated
        logger.info(
            "Workload for %s set to %d/%d", member.name, active_tasks, member.max_tasks
        )
        return updated
