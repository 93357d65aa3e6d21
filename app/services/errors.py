"""
Errors raised by the timetable service.
"""


class TimetableError(Exception):
    pass


class ClassNotFoundError(TimetableError):
    def __init__(self, class_id: str):
        super().__init__(f"Class not found: {class_id}")
        self.class_id = class_id


class EmptyTimetableError(TimetableError):
    def __init__(self):
        super().__init__("No classes to arrange. Add some classes first.")
