"""
Command-line entry point for the Timetable Builder.
Manages the stored timetable: add, remove, list, check for clashes and auto-arrange.
"""

import sys
import argparse
import logging

from app.models import Day
from app.services.conflicts import group_conflict_days
from app.services.errors import TimetableError
from app.services.storage import TimetableStorage
from app.services.timetable import TimetableService
from app.services.time_utils import (
    format_time, format_relative_time, time_to_minutes, minutes_to_time, is_valid_time,
    get_classes_for_day, sort_by_time
)
from app.core.logging_config import setup_logging

TIME_FORMAT_HELP = "24-hour HH:MM, e.g. 09:00"


def parse_time(value: str) -> str:
    """Validate and normalise an HH:MM argument."""
    if not is_valid_time(value):
        raise argparse.ArgumentTypeError(f"Invalid time: '{value}'. Expected {TIME_FORMAT_HELP}.")
    return minutes_to_time(time_to_minutes(value))


def parse_day(value: str) -> Day:
    for day in Day:
        if day.value.lower() == value.strip().lower():
            return day
    raise argparse.ArgumentTypeError(
        f"Invalid day: '{value}'. Expected one of: {', '.join(d.value for d in Day)}."
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Timetable Builder - build a weekly class timetable and resolve clashes"
    )
    parser.add_argument('--storage', help='Path of the timetable JSON file')
    parser.add_argument('--verbose', action='store_true', help='Enable verbose output')

    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('list', help='List all classes')

    add = subparsers.add_parser('add', help='Add a class')
    add.add_argument('name', help='Subject / class name')
    add.add_argument('--day', dest='days', action='append', type=parse_day, required=True,
                     help='Day the class meets on (repeatable)')
    add.add_argument('--start', required=True, type=parse_time, help=f'Start time, {TIME_FORMAT_HELP}')
    add.add_argument('--end', required=True, type=parse_time, help=f'End time, {TIME_FORMAT_HELP}')
    add.add_argument('--location', help='Room or building')

    remove = subparsers.add_parser('remove', help='Remove a class by id')
    remove.add_argument('class_id')

    subparsers.add_parser('clear', help='Remove all classes')
    subparsers.add_parser('conflicts', help='Show clashing classes')
    subparsers.add_parser('arrange', help='Auto-arrange classes to remove clashes')
    subparsers.add_parser('grid', help='Show the timetable day by day')

    return parser


def describe(class_item) -> str:
    days = ", ".join(day.value for day in class_item.days)
    text = (f"[{class_item.id}] {class_item.name}: {days} "
            f"{format_time(class_item.start_time)} - {format_time(class_item.end_time)}")
    if class_item.location:
        text += f" @ {class_item.location}"
    return text


def run(args, service: TimetableService) -> int:
    if args.command == 'list':
        timetable = service.get_timetable()
        if not timetable.classes:
            print("No classes yet. Add one with: main.py add NAME --day Monday --start 09:00 --end 10:00")
            return 0
        count = len(timetable.classes)
        saved = f" (saved {format_relative_time(timetable.last_updated)})" if timetable.last_updated else ""
        print(f"{count} class{'' if count == 1 else 'es'}{saved}")
        for class_item in timetable.classes:
            print(f"  {describe(class_item)}")
        return 0

    if args.command == 'add':
        if time_to_minutes(args.start) >= time_to_minutes(args.end):
            print("Error: End time must be after start time.", file=sys.stderr)
            return 1
        class_item = service.add_class(args.name, args.days, args.start, args.end, args.location)
        print(f"Added {describe(class_item)}")
        return 0

    if args.command == 'remove':
        class_item = service.remove_class(args.class_id)
        print(f'"{class_item.name}" has been removed from your schedule.')
        return 0

    if args.command == 'clear':
        service.clear()
        print("All classes have been removed from your timetable.")
        return 0

    if args.command == 'conflicts':
        grouped = group_conflict_days(service.find_conflicts())
        if not grouped:
            print("No conflicts.")
            return 0
        print(f"Schedule Conflicts Detected ({len(grouped)})")
        for conflict, days in grouped:
            c1, c2 = conflict.class1, conflict.class2
            print(f"  {c1.name} ({format_time(c1.start_time)}-{format_time(c1.end_time)}) and "
                  f"{c2.name} ({format_time(c2.start_time)}-{format_time(c2.end_time)}) "
                  f"on {', '.join(day.value for day in days)}")
        return 0

    if args.command == 'arrange':
        result = service.auto_arrange()
        if result.conflicts:
            print(f"{len(result.conflicts)} class(es) couldn't fit without conflicts and were removed:")
            for class_item in result.conflicts:
                print(f"  {describe(class_item)}")
        else:
            print("All classes have been arranged without conflicts!")
        for class_item in result.arranged:
            print(f"  {describe(class_item)}")
        return 0

    if args.command == 'grid':
        classes = service.list_classes()
        for day in Day:
            print(day.value)
            day_classes = sort_by_time(get_classes_for_day(classes, day))
            if not day_classes:
                print("  -")
            for class_item in day_classes:
                where = f" @ {class_item.location}" if class_item.location else ""
                print(f"  {format_time(class_item.start_time)} - {format_time(class_item.end_time)}"
                      f"  {class_item.name}{where}")
        return 0

    return 1


def main(argv=None) -> int:
    """
    Main function for the CLI.
    Returns the process exit code.
    """
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    service = TimetableService(TimetableStorage(args.storage))
    try:
        return run(args, service)
    except TimetableError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
