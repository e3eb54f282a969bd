"""
Staff API Router
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from wastewatch.dependencies import get_report_store, get_staff_directory
from wastewatch.models.report import Report
from wastewatch.models.staff import StaffMember
from wastewatch.schemas import StaffRosterResponse
from wastewatch.services.assignment_service import select_best_staff
from wastewatch.services.report_query import active_tasks
from wastewatch.services.report_service import ReportStore
from wastewatch.services.staff_directory import StaffDirectory

router = APIRouter()


@router.get("", response_model=List[StaffMember])
async def list_staff(directory: StaffDirectory = Depends(get_staff_directory)):
    """List all staff members"""
    return directory.list_staff()


@router.get("/roster", response_model=StaffRosterResponse)
async def get_roster(directory: StaffDirectory = Depends(get_staff_directory)):
    """Active staff first, best rated first, with summary figures"""
    return StaffRosterResponse(
        items=directory.roster(),
        active_count=directory.active_count,
        total_count=len(directory),
        total_completed=directory.total_completed,
        average_rating=directory.average_rating,
    )


@router.get("/best", response_model=StaffMember)
async def get_best_available(directory: StaffDirectory = Depends(get_staff_directory)):
    """The staff member auto-assignment would pick right now"""
    member = select_best_staff(directory.list_staff())
    
    if not member:
        raise HTTPException(status_code=404, detail="No eligible staff available")
    
    return member


@router.get("/{staff_id}", response_model=StaffMember)
async def get_staff_member(
    staff_id: str,
    directory: StaffDirectory = Depends(get_staff_directory),
):
    """Get a single staff member"""
    member = directory.get(staff_id)
    
    if not member:
        raise HTTPException(status_code=404, detail="Staff member not found")
    
    return member


@router.get("/{staff_id}/tasks", response_model=List[Report])
async def get_staff_tasks(
    staff_id: str,
    directory: StaffDirectory = Depends(get_staff_directory),
    store: ReportStore = Depends(get_report_store),
):
    """Open tasks (assigned or in progress) for one staff member"""
    if staff_id not in directory:
        raise HTTPException(status_code=404, detail="Staff member not found")
    
    return active_tasks(store.reports, staff_id)
