"""
Staff member model
"""
from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class StaffMember(BaseModel):
    """A cleanup worker eligible for task assignment"""
    
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )
    
    id: str = Field(..., min_length=1)
    name: str
    zone: str
    rating: float = Field(0.0, ge=0.0, le=5.0)
    tasks_completed: int = Field(0, ge=0)
    active_tasks: int = Field(0, ge=0)
    max_tasks: int = Field(..., gt=0)
    active: bool = True
    
    @property
    def workload_ratio(self) -> float:
        """Open assignments as a fraction of capacity"""
        return self.active_tasks / self.max_tasks
    
    @computed_field(alias="workloadPercent")
    @property
    def workload_percent(self) -> int:
        """Workload as a whole percentage, capped at 100"""
        return min(100, round(self.workload_ratio * 100))
    
    @property
    def has_capacity(self) -> bool:
        return self.active_tasks < self.max_tasks
    
    def __repr__(self) -> str:
        return f"<StaffMember {self.name} - {self.zone}>"
