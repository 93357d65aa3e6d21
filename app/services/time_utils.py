"""
Time arithmetic and display helpers for the weekly grid.
Times are "HH:MM" wall-clock strings; arithmetic happens in minutes since midnight.
"""

import random
import re
import string
import time
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from app.models import ClassItem, Day, TimeSlot
from app.core.config import (
    CLASS_COLORS, GRID_START_HOUR, GRID_END_HOUR, DEFAULT_SLOT_HEIGHT
)

ID_ALPHABET = string.digits + string.ascii_lowercase

# 24-hour wall-clock time, single-digit hours allowed
TIME_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")


def is_valid_time(value) -> bool:
    return isinstance(value, str) and TIME_PATTERN.fullmatch(value) is not None


def time_to_minutes(value: str) -> int:
    """Convert an "HH:MM" string to minutes since midnight."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(minutes: int) -> str:
    """Convert minutes since midnight to "HH:MM". Hours are not wrapped at 24."""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def format_time(value: str) -> str:
    """Format an "HH:MM" string for display, e.g. "13:30" -> "1:30 PM"."""
    hours, minutes = (int(part) for part in value.split(":"))
    period = "PM" if hours >= 12 else "AM"
    display_hours = hours % 12 or 12
    return f"{display_hours}:{minutes:02d} {period}"


def times_overlap(start1: str, end1: str, start2: str, end2: str) -> bool:
    """Half-open overlap: a class ending as another starts does not overlap it."""
    s1 = time_to_minutes(start1)
    e1 = time_to_minutes(end1)
    s2 = time_to_minutes(start2)
    e2 = time_to_minutes(end2)
    return s1 < e2 and s2 < e1


def generate_time_slots() -> List[TimeSlot]:
    """Hourly grid rows from 6 AM to 10 PM inclusive."""
    slots = []
    for hour in range(GRID_START_HOUR, GRID_END_HOUR + 1):
        period = "PM" if hour >= 12 else "AM"
        display_hour = hour % 12 or 12
        slots.append(TimeSlot(hour=hour, minute=0, label=f"{display_hour}:00 {period}"))
    return slots


def get_class_color(index: int) -> str:
    return CLASS_COLORS[index % len(CLASS_COLORS)]


def generate_id() -> str:
    suffix = "".join(random.choice(ID_ALPHABET) for _ in range(9))
    return f"class_{int(time.time() * 1000)}_{suffix}"


def get_class_grid_position(class_item: ClassItem,
                            slot_height: float = DEFAULT_SLOT_HEIGHT) -> Tuple[float, float]:
    """
    Calculate where a class sits in the weekly grid.

    Args:
        class_item: The class to position
        slot_height: Height of one hourly row

    Returns:
        Tuple of (top, height) measured from the first grid row
    """
    start_minutes = time_to_minutes(class_item.start_time)
    end_minutes = time_to_minutes(class_item.end_time)
    grid_start_minutes = GRID_START_HOUR * 60

    top = ((start_minutes - grid_start_minutes) / 60) * slot_height
    height = ((end_minutes - start_minutes) / 60) * slot_height
    return top, height


def get_classes_for_day(classes: List[ClassItem], day: Day) -> List[ClassItem]:
    return [c for c in classes if day in c.days]


def sort_by_time(classes: List[ClassItem]) -> List[ClassItem]:
    return sorted(classes, key=lambda c: time_to_minutes(c.start_time))


def format_relative_time(iso_string: str, now: Optional[datetime] = None) -> str:
    """Describe how long ago an ISO-8601 timestamp was, e.g. "5 mins ago"."""
    moment = datetime.fromisoformat(iso_string.replace("Z", "+00:00"))
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    if now is None:
        now = datetime.now(timezone.utc)

    diff_mins = int((now - moment).total_seconds() // 60)
    if diff_mins < 1:
        return "Just now"
    if diff_mins < 60:
        return f"{diff_mins} min{'' if diff_mins == 1 else 's'} ago"

    diff_hours = diff_mins // 60
    if diff_hours < 24:
        return f"{diff_hours} hour{'' if diff_hours == 1 else 's'} ago"

    diff_days = diff_hours // 24
    if diff_days < 7:
        return f"{diff_days} day{'' if diff_days == 1 else 's'} ago"

    return moment.date().isoformat()
