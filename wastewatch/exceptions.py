"""
Domain exceptions raised by the report services
"""
from typing import Optional


class WasteWatchError(Exception):
    """Base class for all domain errors"""


class PersistenceError(WasteWatchError):
    """The key-value provider failed to store a snapshot"""
    
    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"Failed to persist '{key}': {message}")


class ConcurrentModificationError(PersistenceError):
    """The stored snapshot moved on since this writer last saw it"""
    
    def __init__(self, key: str, expected_version: int, actual_version: int):
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            key,
            f"expected version {expected_version}, found {actual_version}",
        )


class DuplicateReportError(WasteWatchError):
    """A report with the same id already exists"""
    
    def __init__(self, report_id: str):
        self.report_id = report_id
        super().__init__(f"Report {report_id} already exists")


class InvalidTransitionError(WasteWatchError):
    """A status change that the report lifecycle does not allow"""
    
    def __init__(self, report_id: str, current: str, target: str):
        self.report_id = report_id
        self.current = current
        self.target = target
        super().__init__(f"Report {report_id} cannot move from {current} to {target}")


class StaffNotFoundError(WasteWatchError):
    """An assignment referenced a staff id missing from the directory"""
    
    def __init__(self, staff_id: str, detail: Optional[str] = None):
        self.staff_id = staff_id
        super().__init__(detail or f"Staff member {staff_id} not found")
