"""
API Routers package
"""
from wastewatch.routers import dashboard, reports, staff

__all__ = ["dashboard", "reports", "staff"]
