"""
Services package
"""
from wastewatch.services.assignment_service import AssignmentService, select_best_staff
from wastewatch.services.classifier_service import ClassifierService
from wastewatch.services.report_service import ReportStore
from wastewatch.services.staff_directory import StaffDirectory
from wastewatch.services.storage import (
    KeyValueStorage,
    MemoryKeyValueStorage,
    SqlKeyValueStorage,
)

__all__ = [
    "AssignmentService",
    "select_best_staff",
    "ClassifierService",
    "ReportStore",
    "StaffDirectory",
    "KeyValueStorage",
    "MemoryKeyValueStorage",
    "SqlKeyValueStorage",
]
