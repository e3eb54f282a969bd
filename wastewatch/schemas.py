"""
Pydantic schemas for API validation
"""
import enum
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from wastewatch.models.report import Priority, Report, ReportStatus, WasteType
from wastewatch.models.staff import StaffMember


class CamelModel(BaseModel):
    """Base schema using the same camelCase wire names as the stored records"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============ Report Schemas ============

class ReportCreate(CamelModel):
    """Schema for a citizen report submission"""
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=2000)
    waste_type: WasteType
    address: str = Field(..., min_length=1, max_length=500)
    before_image: Optional[str] = None
    
    @field_validator("title", "description", "address")
    @classmethod
    def strip_text(cls, v: str) -> str:
        """Trim surrounding whitespace from free text"""
        return v.strip()


class ReportUpdate(CamelModel):
    """Schema for a partial report update.
    
    Identity and creation-time fields (id, createdAt, aiConfidence,
    creditsEarned) are immutable and rejected here.
    """
    model_config = ConfigDict(extra="forbid")
    
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    waste_type: Optional[WasteType] = None
    status: Optional[ReportStatus] = None
    priority: Optional[Priority] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    address: Optional[str] = Field(None, min_length=1, max_length=500)
    assigned_to: Optional[str] = None
    before_image: Optional[str] = None
    after_image: Optional[str] = None
    
    @field_validator("assigned_to")
    @classmethod
    def assignment_not_cleared(cls, v: Optional[str]) -> str:
        """An assignment can be changed but never removed"""
        if v is None:
            raise ValueError("assignedTo cannot be cleared")
        return v
    
    def changes(self) -> dict:
        """Only the fields the caller actually supplied"""
        return self.model_dump(exclude_unset=True)


class BulkUpdateRequest(CamelModel):
    """Schema for applying one update to many reports"""
    ids: List[str] = Field(..., min_length=1)
    updates: ReportUpdate


class SortOrder(str, enum.Enum):
    """Report list orderings"""
    NEWEST = "newest"
    OLDEST = "oldest"
    PRIORITY = "priority"


class ReportQuery(CamelModel):
    """Filter, search and ordering options for a report listing"""
    status: Union[ReportStatus, Literal["all"]] = "all"
    priority: Union[Priority, Literal["all"]] = "all"
    search: Optional[str] = None
    sort: SortOrder = SortOrder.NEWEST


class ReportListResponse(CamelModel):
    """Schema for a report listing"""
    items: List[Report]
    total: int


# ============ Staff Schemas ============

class StaffRosterResponse(CamelModel):
    """Roster listing with summary figures"""
    items: List[StaffMember]
    active_count: int
    total_count: int
    total_completed: int
    average_rating: float


# ============ Action Schemas ============

class AssignStaffRequest(CamelModel):
    """Schema for manually assigning a staff member to a report"""
    staff_id: str = Field(..., min_length=1)


class ChangeStatusRequest(CamelModel):
    """Schema for changing report status"""
    status: ReportStatus


class AssignmentResponse(CamelModel):
    """Schema for the outcome of an assignment"""
    report: Report
    staff: StaffMember


# ============ Dashboard Schemas ============

class DashboardStats(CamelModel):
    """Overview figures for the admin dashboard"""
    total: int
    pending: int
    assigned: int
    in_progress: int
    resolved: int
    critical: int
    by_waste_type: Dict[str, int]
    total_credits: int
    top_staff: List[StaffMember]
