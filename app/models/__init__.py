"""
Data models for the timetable builder.
"""

from .models import (
    Day,
    ClassItem,
    TimeConflict,
    TimeSlot,
    Timetable,
    ArrangeResult,
    ConflictViolation,
    ValidationResult
)

__all__ = [
    "Day",
    "ClassItem",
    "TimeConflict",
    "TimeSlot",
    "Timetable",
    "ArrangeResult",
    "ConflictViolation",
    "ValidationResult"
]
