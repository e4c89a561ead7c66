from abc import ABC, abstractmethod
from typing import Any, Dict, List


class PersistenceFailure(RuntimeError):
    """Raised when the storage backend cannot be read or written."""


class DataAccessLayer(ABC):
    """
    Abstract Base Class for a Data Access Layer.
    Defines the contract for storing health records, so the ingestion and
    dashboard code can work with any backend (JSON file, DB, etc.).

    Backends raise PersistenceFailure for any storage error.
    """

    @abstractmethod
    def load_records(self) -> List[Dict[str, Any]]:
        """Loads the full raw record collection, or [] if nothing is stored."""
        pass

    @abstractmethod
    def save_records(self, records: List[Dict[str, Any]]) -> None:
        """Replaces the stored collection."""
        pass

    @abstractmethod
    def append_record(self, record: Dict[str, Any]) -> None:
        """
        Appends one record to the stored collection.

        Args:
            record: The canonical raw form of a normalized record.
        """
        pass
