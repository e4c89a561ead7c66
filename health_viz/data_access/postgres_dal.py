import json
from typing import Any, Dict, List, Optional

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from health_viz.config import settings
from health_viz.data_access.dal import DataAccessLayer, PersistenceFailure
from health_viz.infra import log_utils

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS health_records (
    id          BIGSERIAL PRIMARY KEY,
    recorded_on DATE,
    payload     JSONB NOT NULL,
    created_at  TIMESTAMPTZ NOT NULL DEFAULT now()
);
"""

_pool: Optional[ConnectionPool] = None


def get_pool() -> ConnectionPool:
    """Create the shared connection pool on first use."""
    global _pool
    if _pool is None:
        if not settings.DATABASE_URL:
            raise PersistenceFailure("DATABASE_URL is not configured")
        _pool = ConnectionPool(
            conninfo=settings.DATABASE_URL,
            min_size=1,
            max_size=3,
            kwargs={"row_factory": dict_row},
            open=True,
        )
    return _pool


class PostgresDal(DataAccessLayer):
    """
    A Data Access Layer implementation that keeps each raw record as a JSONB
    row in the health_records table. Insertion order is the id order.
    """

    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._pool = pool or get_pool()

    def init_schema(self) -> None:
        """Creates the health_records table if it does not exist yet."""
        try:
            with self._pool.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(SCHEMA_SQL)
        except psycopg.Error as e:
            log_utils.log_message(f"[PostgresDal] Schema setup failed: {e}", "ERROR")
            raise PersistenceFailure(str(e)) from e
        log_utils.log_message("[PostgresDal] health_records table ready")

    def load_records(self) -> List[Dict[str, Any]]:
        log_utils.log_message("[PostgresDal] Loading health records")
        try:
            with self._pool.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT payload FROM health_records ORDER BY id ASC;")
                    return [row["payload"] for row in cur.fetchall()]
        except psycopg.Error as e:
            log_utils.log_message(f"[PostgresDal] Load failed: {e}", "ERROR")
            raise PersistenceFailure(str(e)) from e

    def save_records(self, records: List[Dict[str, Any]]) -> None:
        """Replaces every stored row with `records`, in one transaction."""
        log_utils.log_message(f"[PostgresDal] Replacing collection with {len(records)} records")
        try:
            with self._pool.connection() as conn:
                with conn.transaction():
                    with conn.cursor() as cur:
                        cur.execute("DELETE FROM health_records;")
                        for record in records:
                            self._insert(cur, record)
        except psycopg.Error as e:
            log_utils.log_message(f"[PostgresDal] Save failed: {e}", "ERROR")
            raise PersistenceFailure(str(e)) from e

    def append_record(self, record: Dict[str, Any]) -> None:
        try:
            with self._pool.connection() as conn:
                with conn.cursor() as cur:
                    self._insert(cur, record)
        except psycopg.Error as e:
            log_utils.log_message(f"[PostgresDal] Append failed: {e}", "ERROR")
            raise PersistenceFailure(str(e)) from e

    @staticmethod
    def _insert(cur, record: Dict[str, Any]) -> None:
        cur.execute(
            "INSERT INTO health_records (recorded_on, payload) VALUES (%s, %s::jsonb);",
            (record.get("date"), json.dumps(record, ensure_ascii=False)),
        )
