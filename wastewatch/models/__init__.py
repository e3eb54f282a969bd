"""
Domain and database models
"""
from wastewatch.models.kv_entry import KeyValueEntry
from wastewatch.models.report import (
    PRIORITY_RANK,
    Priority,
    Report,
    ReportStatus,
    WasteType,
)
from wastewatch.models.staff import StaffMember

__all__ = [
    "KeyValueEntry",
    "PRIORITY_RANK",
    "Priority",
    "Report",
    "ReportStatus",
    "WasteType",
    "StaffMember",
]
