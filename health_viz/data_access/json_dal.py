"""JSON file-based implementation of the Data Access Layer."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from health_viz.config import settings
from health_viz.infra import log_utils
from .dal import DataAccessLayer, PersistenceFailure


class JsonDal(DataAccessLayer):
    """
    Persists the record collection as one JSON array on disk.

    Appends read the whole file, add the record and write it back; the last
    writer wins.
    """

    def __init__(self, path: Optional[Path] = None):
        self._path = path

    @property
    def path(self) -> Path:
        return self._path or settings.data_path

    def _read_json(self, path: Path) -> Any:
        if not path.exists():
            return []
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            log_utils.log_message(f"[JsonDal] Error reading {path}: {e}", "ERROR")
            raise PersistenceFailure(f"could not read {path}: {e}") from e

    def _write_json(self, path: Path, data: Any) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            log_utils.log_message(f"[JsonDal] Error writing {path}: {e}", "ERROR")
            raise PersistenceFailure(f"could not write {path}: {e}") from e

    # --- Record Operations ---------------------------------------------------
    def load_records(self) -> List[Dict[str, Any]]:
        data = self._read_json(self.path)
        if not isinstance(data, list):
            raise PersistenceFailure(
                f"expected a JSON array in {self.path}, found {type(data).__name__}"
            )
        return data

    def save_records(self, records: List[Dict[str, Any]]) -> None:
        self._write_json(self.path, records)
        log_utils.log_message(f"[JsonDal] Saved {len(records)} records to {self.path}")

    def append_record(self, record: Dict[str, Any]) -> None:
        records = self.load_records()
        records.append(record)
        self.save_records(records)
