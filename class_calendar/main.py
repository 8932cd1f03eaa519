# class_calendar/main.py
import logging
from typing import List, Optional, Tuple

from class_calendar.config import Settings, settings as default_settings
from class_calendar.database import init_db, make_engine, make_session_factory
from class_calendar.logging_config import setup_logging
from class_calendar.schemas.calendar import CalendarBlock, HourRow, LayoutBox
from class_calendar.schemas.enrollment import Enrollment
from class_calendar.schemas.validation import ValidationResult
from class_calendar.store import ScheduleStore
from class_calendar.utils.blob_store import BlobStore, SqlBlobStore
from class_calendar.utils.conflict import find_conflicting_ids, has_conflict
from class_calendar.utils.csv_export import enrollments_to_csv, make_filename
from class_calendar.utils.excel_export import enrollments_to_xlsx_bytes
from class_calendar.utils.layout import CalendarLayout
from class_calendar.utils.ordering import matches_query, presentation_order
from class_calendar.utils.validation import validate

logger = logging.getLogger("class_calendar")


class EnrollmentService:
    """Query/command surface used by the UI layer.

    Rendering, toasts and downloads live in the caller; after every
    command it re-queries list() / calendar().
    """

    def __init__(
        self,
        store: ScheduleStore,
        layout: CalendarLayout,
        email_domain: str = "rit.edu",
        email_label: str = "RIT",
        export_prefix: str = "enrollments",
    ) -> None:
        self.store = store
        self.calendar_layout = layout
        self.email_domain = email_domain
        self.email_label = email_label
        self.export_prefix = export_prefix

    # ---- queries ----
    def list(self, query: Optional[str] = None) -> List[Enrollment]:
        rows = self.store.list()
        if query:
            rows = [r for r in rows if matches_query(r, query)]
        return presentation_order(rows)

    def validate(self, candidate, exclude_id: Optional[str] = None) -> ValidationResult:
        return validate(
            candidate,
            self.store.list(),
            exclude_id=exclude_id,
            email_domain=self.email_domain,
            email_label=self.email_label,
        )

    def conflicts(self, record, exclude_id: Optional[str] = None) -> bool:
        return has_conflict(record, self.store.list(), exclude_id)

    def conflicting_ids(self):
        return find_conflicting_ids(self.store.list())

    def layout(self, record) -> Optional[LayoutBox]:
        return self.calendar_layout.layout(record)

    def calendar(self) -> List[CalendarBlock]:
        return self.calendar_layout.blocks(self.store.list())

    def hour_rows(self) -> List[HourRow]:
        return self.calendar_layout.hour_rows()

    # ---- commands ----
    def add(self, candidate) -> Tuple[ValidationResult, Optional[Enrollment]]:
        # validate and commit against the same list
        with self.store.lock:
            result = self.validate(candidate)
            if not result.ok:
                logger.info("Add rejected: %s", ", ".join(sorted(result.field_errors)))
                return result, None
            if result.conflict_warning:
                logger.warning("Adding enrollment despite time conflict")
            return result, self.store.add(candidate)

    def replace(self, record_id: str, candidate) -> Tuple[ValidationResult, Optional[Enrollment]]:
        with self.store.lock:
            result = self.validate(candidate, exclude_id=record_id)
            if not result.ok:
                logger.info("Edit of %s rejected: %s", record_id, ", ".join(sorted(result.field_errors)))
                return result, None
            if result.conflict_warning:
                logger.warning("Saving enrollment %s despite time conflict", record_id)
            return result, self.store.replace(record_id, candidate)

    def remove(self, record_id: str) -> bool:
        return self.store.remove(record_id)

    # ---- exports ----
    def export_csv(self) -> str:
        return enrollments_to_csv(self.list())

    def export_xlsx(self) -> bytes:
        return enrollments_to_xlsx_bytes(self.list())

    def export_filename(self, ext: str = "csv") -> str:
        return make_filename(self.export_prefix, ext)


def create_service(
    settings: Optional[Settings] = None,
    blob_store: Optional[BlobStore] = None,
    id_factory=None,
) -> EnrollmentService:
    settings = settings or default_settings
    setup_logging(settings)

    if blob_store is None:
        engine = make_engine(settings.DB_URL)
        init_db(engine)
        blob_store = SqlBlobStore(make_session_factory(engine))

    store_kwargs = {"id_factory": id_factory} if id_factory else {}
    store = ScheduleStore(blob_store, settings.STORAGE_KEY, **store_kwargs)
    layout = CalendarLayout(
        settings.CALENDAR_START_HOUR,
        settings.CALENDAR_END_HOUR,
        settings.CALENDAR_UNIT_HEIGHT,
    )
    logger.info("Enrollment calendar ready (%d record(s))", len(store))
    return EnrollmentService(
        store,
        layout,
        email_domain=settings.EMAIL_DOMAIN,
        email_label=settings.EMAIL_LABEL,
        export_prefix=settings.EXPORT_FILENAME_PREFIX,
    )
