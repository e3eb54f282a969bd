"""
Built-in sample data used to seed an empty store and as the fallback
when the stored snapshot cannot be read
"""
from typing import List

from wastewatch.models.report import Report
from wastewatch.models.staff import StaffMember

SAMPLE_STAFF = [
    {"id": "1", "name": "Arjun Patel", "rating": 4.8, "tasksCompleted": 142, "activeTasks": 3, "maxTasks": 8, "zone": "Zone A", "active": True},
    {"id": "2", "name": "Priya Sharma", "rating": 4.6, "tasksCompleted": 128, "activeTasks": 2, "maxTasks": 8, "zone": "Zone B", "active": True},
    {"id": "3", "name": "Rahul Kumar", "rating": 4.9, "tasksCompleted": 167, "activeTasks": 1, "maxTasks": 8, "zone": "Zone A", "active": True},
    {"id": "4", "name": "Sneha Reddy", "rating": 4.5, "tasksCompleted": 95, "activeTasks": 4, "maxTasks": 8, "zone": "Zone C", "active": False},
    {"id": "5", "name": "Vikram Singh", "rating": 4.7, "tasksCompleted": 110, "activeTasks": 2, "maxTasks": 8, "zone": "Zone B", "active": True},
]

SAMPLE_REPORTS = [
    {
        "id": "1", "title": "Plastic waste near park", "description": "Large pile of plastic bags and bottles",
        "wasteType": "plastic", "status": "pending", "priority": "high", "latitude": 28.6139, "longitude": 77.2090,
        "address": "Central Park, Sector 12", "createdAt": "2026-02-17T10:30:00Z", "aiConfidence": 94, "creditsEarned": 25,
    },
    {
        "id": "2", "title": "Electronic waste dump", "description": "Old monitors and keyboards discarded",
        "wasteType": "electronic", "status": "assigned", "priority": "critical", "latitude": 28.6200, "longitude": 77.2150,
        "address": "Industrial Area, Block C", "createdAt": "2026-02-16T14:00:00Z", "assignedTo": "1", "aiConfidence": 89, "creditsEarned": 40,
    },
    {
        "id": "3", "title": "Organic waste overflow", "description": "Garbage bin overflowing with food waste",
        "wasteType": "organic", "status": "in_progress", "priority": "medium", "latitude": 28.6100, "longitude": 77.2050,
        "address": "Market Road, Lane 4", "createdAt": "2026-02-15T09:00:00Z", "assignedTo": "3", "aiConfidence": 97, "creditsEarned": 15,
    },
    {
        "id": "4", "title": "Hazardous chemical containers", "description": "Paint cans and chemical bottles",
        "wasteType": "hazardous", "status": "resolved", "priority": "critical", "latitude": 28.6180, "longitude": 77.2120,
        "address": "Factory Road, Sector 8", "createdAt": "2026-02-14T16:45:00Z", "assignedTo": "2", "aiConfidence": 91, "creditsEarned": 50,
    },
    {
        "id": "5", "title": "Mixed waste on sidewalk", "description": "Various waste materials blocking walkway",
        "wasteType": "mixed", "status": "pending", "priority": "low", "latitude": 28.6150, "longitude": 77.2080,
        "address": "Residential Block, Sector 15", "createdAt": "2026-02-13T11:20:00Z", "aiConfidence": 85, "creditsEarned": 10,
    },
]


def sample_staff() -> List[StaffMember]:
    return [StaffMember.model_validate(item) for item in SAMPLE_STAFF]


def sample_reports() -> List[Report]:
    return [Report.model_validate(item) for item in SAMPLE_REPORTS]
