"""Utility modules for Marks Scaler."""

from .csv_import import parse_csv, read_students_csv
from .storage import RosterStore, StorageError, export_to_json, import_from_json

__all__ = [
    "parse_csv",
    "read_students_csv",
    "RosterStore",
    "StorageError",
    "export_to_json",
    "import_from_json",
]
