"""
Services for conflict detection, auto-arrangement, validation and persistence.
"""

from .conflicts import find_conflicts
from .arranger import TimetableArranger, auto_arrange_classes
from .validator import TimetableValidator
from .storage import TimetableStorage
from .timetable import TimetableService

__all__ = [
    "find_conflicts",
    "TimetableArranger",
    "auto_arrange_classes",
    "TimetableValidator",
    "TimetableStorage",
    "TimetableService"
]
