from typing import Any, Dict, List

from health_viz.config import settings
from health_viz.core.records import HealthRecord, InvalidRecord, normalize_record
from health_viz.data_access.dal import DataAccessLayer
from health_viz.data_access.json_dal import JsonDal
from health_viz.infra import log_utils
try:
    from health_viz.data_access.postgres_dal import PostgresDal
except ImportError:  # pragma: no cover - Postgres optional
    PostgresDal = None


def get_dal() -> DataAccessLayer:
    """
    Select the appropriate DAL based on environment settings.

    The Postgres backend has its table created on selection; if that fails
    the JSON file store is used instead.
    """
    if (
        PostgresDal
        and settings.DATABASE_URL
        and settings.ENVIRONMENT == "production"
    ):
        try:
            dal = PostgresDal()
            dal.init_schema()
            return dal
        except Exception as e:
            log_utils.log_message(
                f"[ingest] Postgres DAL init failed: {e}. Falling back to JSON.", "WARN"
            )
    return JsonDal()


def ingest_record(dal: DataAccessLayer, raw: Dict[str, Any]) -> HealthRecord:
    """
    Normalize one raw record and append it to storage.

    An InvalidRecord is raised before anything is written; PersistenceFailure
    from the DAL propagates unchanged.
    """
    try:
        record = normalize_record(raw)
    except InvalidRecord as e:
        log_utils.log_message(f"[ingest] Rejected record {raw!r}: {e}", "WARN")
        raise

    dal.append_record(record.to_raw())
    log_utils.log_message(f"[ingest] Stored record for {record.date.isoformat()}", "INFO")
    return record


def load_raw_records(dal: DataAccessLayer) -> List[Dict[str, Any]]:
    """Return the full stored collection exactly as persisted."""
    records = dal.load_records()
    log_utils.log_message(f"[ingest] Loaded {len(records)} stored records", "INFO")
    return records
