"""
FastAPI dependencies for the shared report services
"""
from fastapi import Depends, HTTPException, Request

from wastewatch.services.assignment_service import AssignmentService
from wastewatch.services.classifier_service import ClassifierService
from wastewatch.services.report_service import ReportStore
from wastewatch.services.staff_directory import StaffDirectory


def get_report_store(request: Request) -> ReportStore:
    """The store created at startup"""
    store = getattr(request.app.state, "report_store", None)
    if store is None or not store.is_loaded:
        raise HTTPException(status_code=503, detail="Report store not ready")
    return store


def get_staff_directory(request: Request) -> StaffDirectory:
    """The roster seeded at startup"""
    return request.app.state.staff_directory


def get_classifier(request: Request) -> ClassifierService:
    """The submission classifier shared by all requests"""
    return request.app.state.classifier


def get_assignment_service(
    store: ReportStore = Depends(get_report_store),
    directory: StaffDirectory = Depends(get_staff_directory),
) -> AssignmentService:
    """Assignment service bound to the current store and roster"""
    return AssignmentService(store, directory)
