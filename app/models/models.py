"""
Data models for the Timetable Builder.
Defines all data structures used throughout the application.
"""

import dataclasses
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any
from enum import Enum


class Day(Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


@dataclass
class ClassItem:
    id: str
    name: str
    days: List[Day]
    start_time: str  # "HH:MM", 24-hour
    end_time: str
    location: Optional[str] = None
    color: Optional[str] = None

    def __hash__(self):
        return hash(self.id)

    def __str__(self):
        days = ", ".join(day.value for day in self.days)
        return f"{self.name} ({days} {self.start_time}-{self.end_time})"

    def replace(self, **changes) -> 'ClassItem':
        """
        Copy this class with some fields overridden.

        The id is always carried over and the days list is copied, so the
        new value never shares state with the original.
        """
        changes.pop("id", None)
        changes.setdefault("days", list(self.days))
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "name": self.name,
            "days": [day.value for day in self.days],
            "startTime": self.start_time,
            "endTime": self.end_time,
        }
        if self.location is not None:
            data["location"] = self.location
        if self.color is not None:
            data["color"] = self.color
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ClassItem':
        """
        Build a ClassItem from its stored (camelCase) form.

        Raises:
            KeyError, TypeError, ValueError: If the data is not a class entry
        """
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            days=[Day(value) for value in data["days"]],
            start_time=str(data["startTime"]),
            end_time=str(data["endTime"]),
            location=data.get("location"),
            color=data.get("color")
        )


@dataclass
class TimeConflict:
    class1: ClassItem
    class2: ClassItem
    day: Day

    def __str__(self):
        return f"{self.class1.name} overlaps {self.class2.name} on {self.day.value}"

    def pair_key(self) -> tuple:
        return tuple(sorted((self.class1.id, self.class2.id)))


@dataclass
class TimeSlot:
    hour: int
    minute: int
    label: str


@dataclass
class Timetable:
    classes: List[ClassItem] = field(default_factory=list)
    last_updated: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "classes": [item.to_dict() for item in self.classes],
            "lastUpdated": self.last_updated
        }


@dataclass
class ArrangeResult:
    arranged: List[ClassItem] = field(default_factory=list)
    conflicts: List[ClassItem] = field(default_factory=list)  # classes that could not be placed


@dataclass
class ConflictViolation:
    class1: ClassItem
    class2: ClassItem
    days: List[Day]
    description: str
    severity: str = "hard"


@dataclass
class ValidationResult:
    is_valid: bool
    violations: List[ConflictViolation] = field(default_factory=list)

    def add_violation(self, violation: ConflictViolation):
        self.violations.append(violation)
        if violation.severity == "hard":
            self.is_valid = False

    def get_summary(self) -> str:
        summary = f"Timetable Valid: {self.is_valid}\n"
        summary += f"Conflicting Pairs: {len(self.violations)}\n"
        return summary
