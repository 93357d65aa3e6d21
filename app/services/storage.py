"""
JSON file persistence for the timetable.

The file behaves like a small key-value store: the timetable is one blob,
{"classes": [...], "lastUpdated": "<ISO-8601>"}, stored under a single key.
"""

import json
import os
from datetime import datetime, timezone
from typing import Dict, List, Optional

from app.models import ClassItem, Timetable
from app.core.config import STORAGE_FILE, STORAGE_KEY
from app.services.time_utils import is_valid_time, time_to_minutes
from app.core.logging_config import get_logger

logger = get_logger(__name__)


class TimetableStorage:
    def __init__(self, path: Optional[str] = None, key: str = STORAGE_KEY):
        self.path = path or STORAGE_FILE
        self.key = key

    def load(self) -> Timetable:
        """
        Load the stored timetable.

        Anything unreadable (missing file, bad JSON, entries that are not
        well-formed classes, a non-string timestamp) is treated as no data at all.

        Returns:
            The stored Timetable, or an empty one
        """
        store = self._read_store()
        data = store.get(self.key) if store else None
        if not data:
            return Timetable(classes=[], last_updated=None)

        try:
            classes = [self._parse_entry(entry) for entry in data.get("classes") or []]
            last_updated = data.get("lastUpdated") or None
            if last_updated is not None and not isinstance(last_updated, str):
                raise ValueError(f"lastUpdated is not a timestamp: {last_updated!r}")
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Ignoring malformed timetable data in {self.path}: {e}")
            return Timetable(classes=[], last_updated=None)

        return Timetable(classes=classes, last_updated=last_updated)

    def save(self, classes: List[ClassItem]) -> Timetable:
        timetable = Timetable(
            classes=list(classes),
            last_updated=datetime.now(timezone.utc).isoformat()
        )

        store = self._read_store() or {}
        store[self.key] = timetable.to_dict()

        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(store, f, indent=2)

        return timetable

    @staticmethod
    def _parse_entry(entry) -> ClassItem:
        class_item = ClassItem.from_dict(entry)
        if not class_item.name.strip():
            raise ValueError(f"Class {class_item.id} has no name")
        if not class_item.days:
            raise ValueError(f"Class {class_item.id} has no days")
        for value in (class_item.start_time, class_item.end_time):
            if not is_valid_time(value):
                raise ValueError(f"Class {class_item.id} has an invalid time: {value!r}")
        if time_to_minutes(class_item.start_time) >= time_to_minutes(class_item.end_time):
            raise ValueError(f"Class {class_item.id} ends before it starts")
        return class_item

    def _read_store(self) -> Optional[Dict]:
        if not os.path.exists(self.path):
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                store = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read timetable file {self.path}: {e}")
            return None
        if not isinstance(store, dict):
            logger.warning(f"Timetable file {self.path} does not hold a JSON object")
            return None
        return store
