"""
Timetable validation.
Reports every pair of classes that clash, with all the days they clash on.
"""

from typing import List

from app.models import ClassItem, ConflictViolation, ValidationResult
from app.services.conflicts import find_conflicts, group_conflict_days
from app.services.time_utils import format_time
from app.core.logging_config import get_logger

logger = get_logger(__name__)


class TimetableValidator:
    """
    Validates a weekly timetable.
    Any overlap between two classes on a shared day is a hard violation.
    """

    def validate_timetable(self, classes: List[ClassItem]) -> ValidationResult:
        """
        Validate a complete timetable.

        Args:
            classes: The classes to validate

        Returns:
            ValidationResult with one violation per clashing pair
        """
        result = ValidationResult(is_valid=True)

        for conflict, days in group_conflict_days(find_conflicts(classes)):
            result.add_violation(ConflictViolation(
                class1=conflict.class1,
                class2=conflict.class2,
                days=days,
                description=self._describe(conflict.class1, conflict.class2)
            ))

        logger.info(f"Validated {len(classes)} class(es): {len(result.violations)} conflicting pair(s)")
        for violation in result.violations:
            days = ", ".join(day.value for day in violation.days)
            logger.debug(f"  - {violation.description} on {days}")

        return result

    @staticmethod
    def _describe(class1: ClassItem, class2: ClassItem) -> str:
        return (
            f"{class1.name} ({format_time(class1.start_time)}-{format_time(class1.end_time)}) "
            f"overlaps {class2.name} ({format_time(class2.start_time)}-{format_time(class2.end_time)})"
        )
