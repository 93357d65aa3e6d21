"""
Conflict detection between scheduled classes.
"""

from typing import Dict, List, Set, Tuple

from app.models import ClassItem, Day, TimeConflict
from app.services.time_utils import times_overlap


def find_conflicts(classes: List[ClassItem]) -> List[TimeConflict]:
    """
    Find every pair of classes that overlap on a shared day.

    One TimeConflict is reported per overlapping day, in pair order
    (i < j by input position) and then in the first class's day order.

    Args:
        classes: Classes to check

    Returns:
        List of conflicts, empty if the timetable is clash-free
    """
    conflicts = []

    for i, class1 in enumerate(classes):
        for class2 in classes[i + 1:]:
            for day in class1.days:
                if day not in class2.days:
                    continue
                if times_overlap(class1.start_time, class1.end_time,
                                 class2.start_time, class2.end_time):
                    conflicts.append(TimeConflict(class1=class1, class2=class2, day=day))

    return conflicts


def group_conflict_days(conflicts: List[TimeConflict]) -> List[Tuple[TimeConflict, List[Day]]]:
    """
    Collapse per-day conflicts into one entry per pair of classes.

    Returns:
        (first conflict of the pair, every day the pair clashes on), in first-seen order
    """
    grouped: Dict[Tuple[str, str], Tuple[TimeConflict, List[Day]]] = {}
    for conflict in conflicts:
        key = conflict.pair_key()
        if key in grouped:
            grouped[key][1].append(conflict.day)
        else:
            grouped[key] = (conflict, [conflict.day])
    return list(grouped.values())


def conflicting_class_ids(conflicts: List[TimeConflict]) -> Set[str]:
    ids = set()
    for conflict in conflicts:
        ids.add(conflict.class1.id)
        ids.add(conflict.class2.id)
    return ids
