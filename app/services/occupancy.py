"""
Per-day slot occupancy used while auto-arranging a timetable.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from app.models import Day


@dataclass
class OccupiedInterval:
    start: int
    end: int
    class_id: str


class SlotOccupancy:
    """
    Occupied minute ranges for each day of the week.

    Each day holds a flat list of intervals scanned linearly; intervals are
    never merged, so every mark adds exactly one entry per day.
    """

    def __init__(self):
        self.slots: Dict[Day, List[OccupiedInterval]] = {day: [] for day in Day}

    def is_slot_available(self, start: int, end: int, days: Iterable[Day],
                          exclude_id: Optional[str] = None) -> bool:
        """
        Check that [start, end) is free on every given day.

        Args:
            start: Start minute (inclusive)
            end: End minute (exclusive)
            days: Days that must all be free
            exclude_id: Intervals owned by this class are ignored; an empty id excludes nothing

        Returns:
            True if no interval overlaps the range on any of the days
        """
        for day in days:
            for slot in self.slots[day]:
                if exclude_id and slot.class_id == exclude_id:
                    continue
                if start < slot.end and slot.start < end:
                    return False
        return True

    def mark_slots_occupied(self, start: int, end: int, days: Iterable[Day], class_id: str):
        for day in days:
            self.slots[day].append(OccupiedInterval(start=start, end=end, class_id=class_id))

    def get_day_slots(self, day: Day) -> List[OccupiedInterval]:
        return list(self.slots[day])
