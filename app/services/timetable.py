"""
Timetable service: owns the stored class collection and applies changes to it.
"""

from typing import List, Optional

from app.models import ClassItem, Day, Timetable, TimeConflict, ArrangeResult, ValidationResult
from app.services.arranger import auto_arrange_classes
from app.services.conflicts import find_conflicts
from app.services.errors import ClassNotFoundError, EmptyTimetableError
from app.services.storage import TimetableStorage
from app.services.time_utils import generate_id, get_class_color
from app.services.validator import TimetableValidator
from app.core.logging_config import get_logger

logger = get_logger(__name__)


class TimetableService:
    def __init__(self, storage: Optional[TimetableStorage] = None):
        self.storage = storage or TimetableStorage()

    def get_timetable(self) -> Timetable:
        return self.storage.load()

    def list_classes(self) -> List[ClassItem]:
        return self.storage.load().classes

    def add_class(self, name: str, days: List[Day], start_time: str, end_time: str,
                  location: Optional[str] = None) -> ClassItem:
        """
        Add a class with a fresh id and the next palette color.

        Input is expected to be validated already (see the API request model).
        """
        classes = self.list_classes()
        class_item = ClassItem(
            id=generate_id(),
            name=name,
            days=list(days),
            start_time=start_time,
            end_time=end_time,
            location=location or None,
            color=get_class_color(len(classes))
        )
        classes.append(class_item)
        self.storage.save(classes)
        logger.info(f"Added class {class_item}")
        return class_item

    def remove_class(self, class_id: str) -> ClassItem:
        classes = self.list_classes()
        for class_item in classes:
            if class_item.id == class_id:
                break
        else:
            raise ClassNotFoundError(class_id)

        self.storage.save([c for c in classes if c.id != class_id])
        logger.info(f"Removed class {class_item}")
        return class_item

    def clear(self) -> Timetable:
        logger.info("Clearing all classes")
        return self.storage.save([])

    def find_conflicts(self) -> List[TimeConflict]:
        return find_conflicts(self.list_classes())

    def validate(self) -> ValidationResult:
        return TimetableValidator().validate_timetable(self.list_classes())

    def auto_arrange(self) -> ArrangeResult:
        """
        Rearrange the stored timetable and save the result.

        Arranged classes are recolored by their new position. Classes that
        could not be placed are removed from the timetable and returned in
        the result's conflicts list.

        Raises:
            EmptyTimetableError: If there is nothing to arrange
        """
        classes = self.list_classes()
        if not classes:
            raise EmptyTimetableError()

        result = auto_arrange_classes(classes)
        recolored = [
            class_item.replace(color=get_class_color(index))
            for index, class_item in enumerate(result.arranged)
        ]
        self.storage.save(recolored)

        if result.conflicts:
            logger.warning(
                f"{len(result.conflicts)} class(es) could not fit without conflicts and were removed: "
                + ", ".join(c.name for c in result.conflicts)
            )
        return ArrangeResult(arranged=recolored, conflicts=result.conflicts)
