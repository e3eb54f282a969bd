"""
WasteWatch - Main FastAPI Application
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wastewatch.config import get_settings
from wastewatch.database import close_db, get_session_factory, init_db
from wastewatch.routers import dashboard, reports, staff
from wastewatch.services.classifier_service import ClassifierService
from wastewatch.services.report_service import ReportStore
from wastewatch.services.sample_data import sample_staff
from wastewatch.services.staff_directory import StaffDirectory
from wastewatch.services.storage import SqlKeyValueStorage

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    logger.info("Starting %s", settings.app_name)
    await init_db()
    
    store = ReportStore.from_settings(SqlKeyValueStorage(get_session_factory()), settings)
    await store.load()
    
    app.state.report_store = store
    app.state.staff_directory = StaffDirectory(sample_staff())
    app.state.classifier = ClassifierService()
    logger.info(
        "Report store ready with %d reports (strict transitions: %s)",
        len(store.reports), settings.strict_transitions,
    )
    
    yield
    
    # Shutdown
    logger.info("Shutting down %s", settings.app_name)
    await close_db()


app = FastAPI(
    title=settings.app_name,
    description="Waste reporting, cleanup assignment and oversight API",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(reports.router, prefix="/api/reports", tags=["Reports"])
app.include_router(staff.router, prefix="/api/staff", tags=["Staff"])
app.include_router(dashboard.router)


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}
