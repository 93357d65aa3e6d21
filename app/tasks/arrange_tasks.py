"""
Celery tasks for auto-arranging the timetable in the background.
"""

import traceback
from typing import Optional

from app.core.celery_app import celery_app
from app.core.logging_config import get_logger
from app.services.storage import TimetableStorage
from app.services.timetable import TimetableService

logger = get_logger(__name__)


def run_arrangement(storage_path: Optional[str] = None) -> dict:
    """
    Auto-arrange the stored timetable and summarise the outcome.

    Args:
        storage_path: Timetable file to use instead of the configured one

    Returns:
        dict: JSON-serialisable summary, success False on any failure
    """
    try:
        service = TimetableService(TimetableStorage(storage_path))
        result = service.auto_arrange()

        return {
            "success": True,
            "message": (
                f"Arranged {len(result.arranged)} class(es); "
                f"{len(result.conflicts)} could not be placed"
            ),
            "arranged": [c.to_dict() for c in result.arranged],
            "unplaceable": [c.to_dict() for c in result.conflicts]
        }

    except Exception as e:
        error_trace = traceback.format_exc()
        logger.error(f"Error in arrange task: {error_trace}")

        return {
            "success": False,
            "message": f"Auto-arrange failed: {str(e)}",
            "error": str(e)
        }


@celery_app.task(bind=True, name="arrange_timetable")
def arrange_timetable_task(self, storage_path: Optional[str] = None):
    """
    Async task to auto-arrange the timetable.

    Returns:
        dict: Arranged and unplaceable classes
    """
    self.update_state(state="PROGRESS", meta={"status": "Arranging classes..."})
    return run_arrangement(storage_path)
