"""
Classifier Service - Turns a citizen submission into a report record
"""
import random
import uuid
from datetime import datetime, timezone
from typing import Optional, Tuple

from wastewatch.models.report import Priority, Report, ReportStatus, WasteType
from wastewatch.schemas import ReportCreate


class ClassifierService:
    """Derives priority, verification figures and location for new reports.
    
    Image verification and geolocation are simulated: confidence and credits
    are drawn from fixed ranges and coordinates are jittered around the city
    reference point. Pass a seeded ``random.Random`` for reproducible output.
    """
    
    # Waste types that need faster cleanup; everything else is medium
    WASTE_TYPE_PRIORITY = {
        WasteType.HAZARDOUS: Priority.CRITICAL,
        WasteType.ELECTRONIC: Priority.HIGH,
    }
    
    CONFIDENCE_RANGE = (85, 99)
    CREDITS_RANGE = (15, 44)
    
    REFERENCE_LATITUDE = 28.6139
    REFERENCE_LONGITUDE = 77.2090
    LOCATION_JITTER = 0.01
    
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
    
    def derive_priority(self, waste_type: WasteType) -> Priority:
        """Priority is fixed at creation from the waste type"""
        return self.WASTE_TYPE_PRIORITY.get(waste_type, Priority.MEDIUM)
    
    def verify(self) -> Tuple[int, int]:
        """
        Simulate photo verification.
        Returns tuple of (confidence percentage, credits earned)
        """
        confidence = self.rng.randint(*self.CONFIDENCE_RANGE)
        credits = self.rng.randint(*self.CREDITS_RANGE)
        return confidence, credits
    
    def locate(self) -> Tuple[float, float]:
        """Approximate coordinates near the city reference point"""
        latitude = self.REFERENCE_LATITUDE + self.rng.random() * self.LOCATION_JITTER
        longitude = self.REFERENCE_LONGITUDE + self.rng.random() * self.LOCATION_JITTER
        return latitude, longitude
    
    def build_report(
        self,
        data: ReportCreate,
        report_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> Report:
        """Create a fully populated pending report from a submission"""
        confidence, credits = self.verify()
        latitude, longitude = self.locate()
        
        return Report(
            id=report_id or str(uuid.uuid4()),
            title=data.title,
            description=data.description,
            waste_type=data.waste_type,
            status=ReportStatus.PENDING,
            priority=self.derive_priority(data.waste_type),
            latitude=latitude,
            longitude=longitude,
            address=data.address,
            created_at=created_at or datetime.now(timezone.utc),
            ai_confidence=confidence,
            credits_earned=credits,
            before_image=data.before_image,
        )
