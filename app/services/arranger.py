"""
Greedy auto-arrangement of classes into a clash-free weekly timetable.

Classes are placed one at a time, longest first. Each keeps its own time if
that is still free, otherwise it moves to the earliest free start inside the
placement window. The pass is single and order-sensitive, so it can fail to
place a class even when some arrangement would fit everything; such classes
are reported back instead of being dropped silently.
"""

from typing import List

from app.models import ClassItem, ArrangeResult
from app.services.conflicts import find_conflicts
from app.services.occupancy import SlotOccupancy
from app.services.time_utils import time_to_minutes, minutes_to_time
from app.core.config import (
    ARRANGE_WINDOW_START, ARRANGE_WINDOW_END, ARRANGE_STEP_MINUTES
)
from app.core.logging_config import get_logger

logger = get_logger(__name__)


class TimetableArranger:
    """
    Re-times classes so that no two overlap on a shared day.
    Days, ids, names and locations are never changed; only start/end times move.
    """

    def __init__(self, classes: List[ClassItem],
                 window_start: int = ARRANGE_WINDOW_START,
                 window_end: int = ARRANGE_WINDOW_END,
                 step: int = ARRANGE_STEP_MINUTES):
        """
        Initialize the arranger.

        Args:
            classes: Classes to arrange, left untouched
            window_start: Earliest start minute for a moved class
            window_end: Latest end minute for a moved class
            step: Minutes between candidate start times
        """
        self.classes = list(classes)
        self.window_start = window_start
        self.window_end = window_end
        self.step = step

    def arrange(self) -> ArrangeResult:
        if not self.classes:
            return ArrangeResult(arranged=[], conflicts=[])

        occupancy = SlotOccupancy()
        arranged = []
        unplaceable = []

        for class_item in self._placement_order():
            placed = self._place(class_item, occupancy)
            if placed is None:
                logger.info(f"No free slot for {class_item}")
                unplaceable.append(class_item)
            else:
                arranged.append(placed)

        # Final verification: the arranged timetable must be clash-free
        remaining = find_conflicts(arranged)
        if remaining:
            logger.error(
                f"Auto-arrange left {len(remaining)} conflict(s) in its own output; "
                f"keeping the original timetable"
            )
            return ArrangeResult(arranged=list(self.classes), conflicts=[])

        logger.info(f"Arranged {len(arranged)} class(es), {len(unplaceable)} could not be placed")
        return ArrangeResult(arranged=arranged, conflicts=unplaceable)

    def _placement_order(self) -> List[ClassItem]:
        # Longest first, then earliest start; sorted() is stable for full ties
        return sorted(self.classes, key=lambda c: (-self._duration(c), time_to_minutes(c.start_time)))

    def _place(self, class_item: ClassItem, occupancy: SlotOccupancy):
        start = time_to_minutes(class_item.start_time)
        end = time_to_minutes(class_item.end_time)
        duration = end - start

        if occupancy.is_slot_available(start, end, class_item.days):
            occupancy.mark_slots_occupied(start, end, class_item.days, class_item.id)
            return class_item.replace()

        candidate = self.window_start
        while candidate + duration <= self.window_end:
            if occupancy.is_slot_available(candidate, candidate + duration, class_item.days):
                occupancy.mark_slots_occupied(candidate, candidate + duration, class_item.days, class_item.id)
                return class_item.replace(
                    start_time=minutes_to_time(candidate),
                    end_time=minutes_to_time(candidate + duration)
                )
            candidate += self.step

        return None

    @staticmethod
    def _duration(class_item: ClassItem) -> int:
        return time_to_minutes(class_item.end_time) - time_to_minutes(class_item.start_time)


def auto_arrange_classes(classes: List[ClassItem]) -> ArrangeResult:
    """Arrange classes with the default placement window."""
    return TimetableArranger(classes).arrange()
