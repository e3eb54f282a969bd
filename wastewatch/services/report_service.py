"""
Report Service - The report store and its persisted snapshot
"""
import asyncio
import logging
from typing import Dict, Iterable, List, Optional, Set, Union

from pydantic import TypeAdapter, ValidationError

from wastewatch.config import Settings, get_settings
from wastewatch.exceptions import (
    ConcurrentModificationError,
    DuplicateReportError,
    InvalidTransitionError,
    PersistenceError,
)
from wastewatch.models.report import Report, ReportStatus
from wastewatch.schemas import ReportQuery, ReportUpdate
from wastewatch.services.report_query import filter_by_status, query_reports
from wastewatch.services.sample_data import sample_reports
from wastewatch.services.storage import KeyValueStorage

logger = logging.getLogger(__name__)

_snapshot_adapter = TypeAdapter(List[Report])

UpdateFields = Union[ReportUpdate, Dict[str, object]]


class ReportStore:
    """Owns the in-memory report collection and its stored snapshot.
    
    The whole collection is written as one JSON blob on every mutation. The
    in-memory list is only replaced after that write succeeds, so a failed
    write leaves both sides as they were and raises PersistenceError.
    Mutations within the process are serialised by a lock; across processes
    the optional version check turns last-write-wins into compare-and-set.
    """
    
    # Edges of the report lifecycle, checked only in strict mode
    ALLOWED_TRANSITIONS: Dict[ReportStatus, Set[ReportStatus]] = {
        ReportStatus.PENDING: {ReportStatus.ASSIGNED},
        ReportStatus.ASSIGNED: {ReportStatus.IN_PROGRESS, ReportStatus.RESOLVED},
        ReportStatus.IN_PROGRESS: {ReportStatus.RESOLVED},
        ReportStatus.RESOLVED: set(),
    }
    
    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = "reports",
        strict_transitions: bool = False,
        optimistic_locking: bool = False,
        seed_sample_data: bool = True,
    ):
        self.storage = storage
        self.key = key
        self.strict_transitions = strict_transitions
        self.optimistic_locking = optimistic_locking
        self.seed_sample_data = seed_sample_data
        
        self._reports: List[Report] = []
        self._version = 0
        self._lock = asyncio.Lock()
        self.is_loaded = False
    
    @classmethod
    def from_settings(
        cls, storage: KeyValueStorage, settings: Optional[Settings] = None
    ) -> "ReportStore":
        settings = settings or get_settings()
        return cls(
            storage,
            key=settings.reports_storage_key,
            strict_transitions=settings.strict_transitions,
            optimistic_locking=settings.optimistic_locking,
            seed_sample_data=settings.seed_sample_data,
        )
    
    # ============ Loading and persistence ============
    
    async def load(self) -> List[Report]:
        """Read the stored snapshot, falling back to sample data.
    
        Also the reload path, so it holds the mutation lock: a reload never
        overwrites a change committed while its read was in flight.
        """
        async with self._lock:
            try:
                raw, version = await self.storage.get_versioned(self.key)
            except Exception as e:
                logger.warning("Could not read '%s', using sample reports: %s", self.key, e)
                if self.optimistic_locking:
                    # Version is unknown; writes conflict until a successful reload
                    logger.warning(
                        "Snapshot '%s' version unknown, reload before writing", self.key
                    )
                self._reports = sample_reports()
                self.is_loaded = True
                return self.reports
    
            self._version = version
    
            if raw is None:
                self._reports = sample_reports() if self.seed_sample_data else []
                if self._reports:
                    try:
                        await self._persist(self._reports)
                        logger.info("Seeded '%s' with %d sample reports", self.key, len(self._reports))
                    except PersistenceError as e:
                        logger.error("Failed to seed sample reports: %s", e)
            else:
                try:
                    self._reports = _snapshot_adapter.validate_json(raw)
                    logger.info("Loaded %d reports from '%s'", len(self._reports), self.key)
                except ValidationError as e:
                    logger.warning(
                        "Stored '%s' is not a valid report list, using sample reports: %s",
                        self.key, e,
                    )
                    self._reports = sample_reports()
    
            self.is_loaded = True
            return self.reports
    
    async def _persist(self, reports: List[Report]) -> None:
        """Write a full snapshot of the collection"""
        data = _snapshot_adapter.dump_json(reports, by_alias=True, exclude_none=True)
        try:
            if self.optimistic_locking:
                version = await self.storage.compare_and_set(self.key, data, self._version)
            else:
                version = await self.storage.set(self.key, data)
        except ConcurrentModificationError:
            logger.warning("Snapshot '%s' changed since version %d", self.key, self._version)
            raise
        except Exception as e:
            logger.error("Failed to write snapshot '%s': %s", self.key, e)
            raise PersistenceError(self.key, str(e)) from e
        
        self._version = version
    
    async def _commit(self, reports: List[Report]) -> None:
        await self._persist(reports)
        self._reports = reports
    
    # ============ Reads ============
    
    @property
    def reports(self) -> List[Report]:
        """Copy of the collection in stored order"""
        return list(self._reports)
    
    @property
    def version(self) -> int:
        """Snapshot version last read or written"""
        return self._version
    
    def get_report(self, report_id: str) -> Optional[Report]:
        return next((r for r in self._reports if r.id == report_id), None)
    
    def list_reports(self, query: Optional[ReportQuery] = None) -> List[Report]:
        """Filtered, searched and sorted view of the collection"""
        return query_reports(self._reports, query)
    
    def get_reports_by_status(self, status: ReportStatus) -> List[Report]:
        return filter_by_status(self._reports, status)
    
    # ============ Mutations ============
    
    async def add_report(self, report: Report) -> Report:
        """Insert a new report at the front of the collection"""
        async with self._lock:
            if self.get_report(report.id):
                raise DuplicateReportError(report.id)
            
            await self._commit([report, *self._reports])
        
        logger.info("Report %s added (%s, %s)", report.id, report.waste_type.value, report.priority.value)
        return report
    
    async def update_report(self, report_id: str, updates: UpdateFields) -> Optional[Report]:
        """Apply a partial update; returns None when the id is unknown"""
        return await self._update(report_id, updates, validate=self.strict_transitions)
    
    async def bulk_update_reports(self, ids: Iterable[str], updates: UpdateFields) -> List[Report]:
        """Apply the same partial update to every listed report.
        
        Unknown ids are ignored. Either every matched report is updated and
        stored, or none is.
        """
        changes = self._changes(updates)
        id_set = set(ids)
        
        async with self._lock:
            updated_reports = []
            new_reports = []
            for report in self._reports:
                if report.id in id_set:
                    report = self._apply(report, changes, validate=self.strict_transitions)
                    updated_reports.append(report)
                new_reports.append(report)
            
            if not updated_reports:
                logger.debug("Bulk update matched no reports")
                return []
            
            await self._commit(new_reports)
        
        logger.info(
            "Bulk updated %d reports: %s", len(updated_reports), ", ".join(changes.keys())
        )
        return updated_reports
    
    async def set_status(self, report_id: str, status: ReportStatus) -> Optional[Report]:
        """Set any status, without lifecycle checks"""
        return await self._update(report_id, {"status": status}, validate=False)
    
    async def transition(self, report_id: str, status: ReportStatus) -> Optional[Report]:
        """Move a report along its lifecycle, raising InvalidTransitionError otherwise"""
        return await self._update(report_id, {"status": status}, validate=True)
    
    async def assign(self, report_id: str, staff_id: str) -> Optional[Report]:
        """Mark a report assigned to a staff member"""
        return await self.update_report(
            report_id, {"status": ReportStatus.ASSIGNED, "assigned_to": staff_id}
        )
    
    async def mark_resolved(self, report_id: str) -> Optional[Report]:
        """Mark the cleanup as complete"""
        return await self.update_report(report_id, {"status": ReportStatus.RESOLVED})
    
    async def _update(
        self, report_id: str, updates: UpdateFields, validate: bool
    ) -> Optional[Report]:
        changes = self._changes(updates)
        
        async with self._lock:
            index = next(
                (i for i, r in enumerate(self._reports) if r.id == report_id), None
            )
            if index is None:
                logger.debug("Update for unknown report %s ignored", report_id)
                return None
            
            report = self._reports[index]
            updated = self._apply(report, changes, validate=validate)
            if updated == report:
                return report
            
            new_reports = list(self._reports)
            new_reports[index] = updated
            await self._commit(new_reports)
        
        if updated.status != report.status:
            logger.info(
                "Report %s status changed from %s to %s",
                report_id, report.status.value, updated.status.value,
            )
        return updated
    
    @staticmethod
    def _changes(updates: UpdateFields) -> Dict[str, object]:
        if not isinstance(updates, ReportUpdate):
            updates = ReportUpdate.model_validate(updates)
        return updates.changes()
    
    def _apply(self, report: Report, changes: Dict[str, object], validate: bool) -> Report:
        """Build the updated record without touching the original"""
        target = changes.get("status")
        if validate and target is not None and target != report.status:
            self.check_transition(report, target, changes.get("assigned_to", report.assigned_to))

        updated = Report.model_validate({**report.model_dump(), **changes})
        if validate and updated.status == ReportStatus.PENDING and updated.assigned_to:
            raise InvalidTransitionError(
                report.id, report.status.value, "pending with a staff member"
            )
        return updated
    
    def check_transition(
        self,
        report: Report,
        target: ReportStatus,
        assigned_to: Optional[str] = None,
    ) -> None:
        """Raise InvalidTransitionError unless report may move to target"""
        if target not in self.ALLOWED_TRANSITIONS[report.status]:
            raise InvalidTransitionError(report.id, report.status.value, target.value)
        if target == ReportStatus.ASSIGNED and not assigned_to:
            raise InvalidTransitionError(
                report.id, report.status.value, f"{target.value} without a staff member"
            )
