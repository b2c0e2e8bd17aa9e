"""JSON file storage for the roster session."""

import json
import logging
from pathlib import Path
from typing import Any

from ..models import Roster

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """A roster file could not be read or parsed."""


class RosterStore:
    """
    File-backed session storage for a single roster.

    Keeps the whole roster, including scaled and rounded marks, in one JSON
    file so a session can be resumed later.

    Usage:
        store = RosterStore("marks-data.json")

        roster = store.load() or Roster()
        roster = scale_exam(roster, "E1", "percentile")
        store.save(roster)
    """

    def __init__(self, path: str = "marks-data.json"):
        """
        Initialize store.

        Args:
            path: JSON file holding the roster.
        """
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self, strict: bool = False) -> Roster | None:
        """
        Load the stored roster.

        Args:
            strict: Raise instead of returning None when the file exists but
                cannot be parsed, so callers about to save do not overwrite it.

        Returns:
            Stored roster, or None if no session exists or the file is unreadable.

        Raises:
            StorageError: strict is set and the stored file is unreadable.
        """
        if not self.path.exists():
            return None

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return Roster.from_dict(data)
        except (json.JSONDecodeError, AttributeError, KeyError, TypeError, ValueError) as e:
            if strict:
                raise StorageError(f"Error parsing stored data in {self.path}: {e}") from e
            logger.warning("Error parsing stored data in %s: %s", self.path, e)
            return None

    def save(self, roster: Roster) -> None:
        """Write the roster, creating parent directories as needed."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(roster.to_dict(), indent=2), encoding="utf-8")
        logger.debug("Saved %d students to %s", len(roster.students), self.path)

    def clear(self) -> bool:
        """
        Delete the stored session.

        Returns:
            True if deleted, False if nothing was stored.
        """
        if self.path.exists():
            self.path.unlink()
            return True
        return False

    def summary(self) -> dict[str, Any] | None:
        """
        Describe the stored session.

        Returns:
            Dict with student and exam counts and exam names, or None when
            there is no non-empty session to resume.
        """
        roster = self.load()
        if roster is None or roster.is_empty():
            return None

        return {
            "students": len(roster.students),
            "exams": len(roster.exams),
            "exam_names": [e.name for e in roster.exams],
            "path": str(self.path),
        }


def export_to_json(roster: Roster, output_path: str) -> None:
    """
    Export the roster with raw marks only.

    Scaled and rounded marks are left out; they are recomputed after import.
    """
    path = Path(output_path)
    path.write_text(
        json.dumps(roster.to_dict(include_derived=False), indent=2),
        encoding="utf-8",
    )


def import_from_json(input_path: str) -> Roster:
    """
    Read a roster exported with export_to_json (or a stored session).

    Raises:
        StorageError: the file is missing, unreadable or not a roster.
    """
    path = Path(input_path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise StorageError(f"Error reading file: {e}") from e
    except json.JSONDecodeError as e:
        raise StorageError("Invalid JSON file") from e

    if not isinstance(data, dict):
        raise StorageError("Invalid JSON file: expected an object with students and exams")

    try:
        return Roster.from_dict(data)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise StorageError(f"Invalid roster data: {e}") from e
