"""
Reports API Router
"""
from typing import List, Literal, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query

from wastewatch.dependencies import (
    get_assignment_service,
    get_classifier,
    get_report_store,
)
from wastewatch.exceptions import (
    DuplicateReportError,
    InvalidTransitionError,
    PersistenceError,
    StaffNotFoundError,
)
from wastewatch.models.report import Priority, Report, ReportStatus
from wastewatch.schemas import (
    AssignmentResponse,
    AssignStaffRequest,
    BulkUpdateRequest,
    ChangeStatusRequest,
    ReportCreate,
    ReportListResponse,
    ReportQuery,
    ReportUpdate,
    SortOrder,
)
from wastewatch.services.assignment_service import AssignmentService
from wastewatch.services.classifier_service import ClassifierService
from wastewatch.services.report_service import ReportStore

router = APIRouter()


def _persistence_failed(e: PersistenceError) -> HTTPException:
    return HTTPException(status_code=503, detail=str(e))


@router.get("", response_model=ReportListResponse)
async def list_reports(
    status: Union[ReportStatus, Literal["all"]] = "all",
    priority: Union[Priority, Literal["all"]] = "all",
    search: Optional[str] = Query(None, max_length=200),
    sort: SortOrder = SortOrder.NEWEST,
    store: ReportStore = Depends(get_report_store),
):
    """List reports with filters, search and ordering"""
    query = ReportQuery(status=status, priority=priority, search=search, sort=sort)
    items = store.list_reports(query)
    return ReportListResponse(items=items, total=len(items))


@router.get("/by-status/{status}", response_model=List[Report])
async def get_reports_by_status(
    status: ReportStatus,
    store: ReportStore = Depends(get_report_store),
):
    """Get all reports with a given status, in stored order"""
    return store.get_reports_by_status(status)


@router.get("/{report_id}", response_model=Report)
async def get_report(report_id: str, store: ReportStore = Depends(get_report_store)):
    """Get a single report"""
    report = store.get_report(report_id)
    
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    
    return report


@router.post("", response_model=Report, status_code=201)
async def create_report(
    report_data: ReportCreate,
    store: ReportStore = Depends(get_report_store),
    classifier: ClassifierService = Depends(get_classifier),
):
    """Create a new report from a citizen submission"""
    report = classifier.build_report(report_data)
    
    try:
        return await store.add_report(report)
    except DuplicateReportError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except PersistenceError as e:
        raise _persistence_failed(e)


@router.patch("/{report_id}", response_model=Report)
async def update_report(
    report_id: str,
    report_data: ReportUpdate,
    store: ReportStore = Depends(get_report_store),
):
    """Update a report"""
    try:
        report = await store.update_report(report_id, report_data)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except PersistenceError as e:
        raise _persistence_failed(e)
    
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    
    return report


@router.post("/bulk", response_model=ReportListResponse)
async def bulk_update_reports(
    request: BulkUpdateRequest,
    store: ReportStore = Depends(get_report_store),
):
    """Apply one update to several reports; unknown ids are skipped"""
    try:
        updated = await store.bulk_update_reports(request.ids, request.updates)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except PersistenceError as e:
        raise _persistence_failed(e)
    
    return ReportListResponse(items=updated, total=len(updated))


@router.post("/{report_id}/assign", response_model=AssignmentResponse)
async def assign_staff(
    report_id: str,
    request: AssignStaffRequest,
    service: AssignmentService = Depends(get_assignment_service),
):
    """Assign a chosen staff member to a report"""
    try:
        result = await service.assign(report_id, request.staff_id)
    except StaffNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except PersistenceError as e:
        raise _persistence_failed(e)
    
    if not result:
        raise HTTPException(status_code=404, detail="Report not found")
    
    report, staff = result
    return AssignmentResponse(report=report, staff=staff)


@router.post("/{report_id}/auto-assign", response_model=AssignmentResponse)
async def auto_assign_staff(
    report_id: str,
    service: AssignmentService = Depends(get_assignment_service),
):
    """Assign the least-loaded available staff member"""
    if not service.store.get_report(report_id):
        raise HTTPException(status_code=404, detail="Report not found")
    
    try:
        result = await service.auto_assign(report_id)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except PersistenceError as e:
        raise _persistence_failed(e)
    
    if not result:
        raise HTTPException(status_code=409, detail="No eligible staff available")
    
    report, staff = result
    return AssignmentResponse(report=report, staff=staff)


@router.post("/{report_id}/status", response_model=Report)
async def change_status(
    report_id: str,
    request: ChangeStatusRequest,
    store: ReportStore = Depends(get_report_store),
):
    """Set report status without lifecycle checks"""
    try:
        report = await store.set_status(report_id, request.status)
    except PersistenceError as e:
        raise _persistence_failed(e)
    
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    
    return report


@router.post("/{report_id}/transition", response_model=Report)
async def transition_status(
    report_id: str,
    request: ChangeStatusRequest,
    store: ReportStore = Depends(get_report_store),
):
    """Move a report to the next lifecycle status"""
    try:
        report = await store.transition(report_id, request.status)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except PersistenceError as e:
        raise _persistence_failed(e)
    
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    
    return report


@router.post("/{report_id}/complete", response_model=Report)
async def complete_report(
    report_id: str,
    store: ReportStore = Depends(get_report_store),
):
    """Mark the cleanup as complete"""
    try:
        report = await store.mark_resolved(report_id)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except PersistenceError as e:
        raise _persistence_failed(e)
    
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    
    return report
