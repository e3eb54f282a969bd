"""
Report model and enums
"""
import enum
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ReportStatus(str, enum.Enum):
    """Report status enum"""
    PENDING = "pending"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"


class Priority(str, enum.Enum):
    """Report priority enum"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class WasteType(str, enum.Enum):
    """Waste type enum"""
    PLASTIC = "plastic"
    ORGANIC = "organic"
    HAZARDOUS = "hazardous"
    ELECTRONIC = "electronic"
    MIXED = "mixed"


# Lower rank sorts first
PRIORITY_RANK = {
    Priority.CRITICAL: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}


class Report(BaseModel):
    """A citizen-submitted waste incident.
    
    Instances are immutable; updates produce a new record via model_copy.
    Serialized with camelCase field names, which is the persisted layout.
    """
    
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )
    
    id: str = Field(..., min_length=1)
    title: str
    description: str = ""
    waste_type: WasteType
    status: ReportStatus = ReportStatus.PENDING
    priority: Priority
    latitude: float
    longitude: float
    address: str
    created_at: datetime
    # Weak reference to StaffMember.id
    assigned_to: Optional[str] = None
    ai_confidence: int = Field(..., ge=0, le=100)
    credits_earned: int = Field(..., ge=0)
    
    # Photo references
    before_image: Optional[str] = None
    after_image: Optional[str] = None
    
    @field_validator("created_at")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC so all reports compare"""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v
    
    def to_storage(self) -> dict:
        """Dump the record using the persisted field names"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
    
    def __repr__(self) -> str:
        return f"<Report {self.id} - {self.status.value}>"
