"""
API routes for managing and arranging the timetable.
"""

from datetime import datetime
from typing import List, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, field_validator, model_validator
from celery.result import AsyncResult

from app.models import ClassItem, Day, TimeConflict
from app.services.conflicts import group_conflict_days, conflicting_class_ids
from app.services.errors import ClassNotFoundError, EmptyTimetableError
from app.services.timetable import TimetableService
from app.services.time_utils import (
    format_time, time_to_minutes, is_valid_time, generate_time_slots,
    get_classes_for_day, get_class_grid_position, sort_by_time
)
from app.core.celery_app import celery_app
from app.core.logging_config import get_logger
from app.tasks.arrange_tasks import arrange_timetable_task

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["timetable"])


def get_service() -> TimetableService:
    return TimetableService()


class ClassCreateRequest(BaseModel):
    """Request model for adding a class."""
    name: str = Field(min_length=1)
    days: List[Day] = Field(min_length=1)
    startTime: str
    endTime: str
    location: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Subject name is required")
        return value.strip()

    @field_validator("startTime", "endTime")
    @classmethod
    def valid_time(cls, value: str) -> str:
        if not is_valid_time(value):
            raise ValueError("Invalid time format")
        hours, minutes = value.split(":")
        return f"{int(hours):02d}:{minutes}"

    @model_validator(mode="after")
    def start_before_end(self):
        if time_to_minutes(self.startTime) >= time_to_minutes(self.endTime):
            raise ValueError("End time must be after start time")
        return self


class ClassResponse(BaseModel):
    """Response model for a single class."""
    id: str
    name: str
    days: List[str]
    startTime: str
    endTime: str
    location: Optional[str] = None
    color: Optional[str] = None


class ConflictResponse(BaseModel):
    """Response model for a clashing pair of classes."""
    class1: ClassResponse
    class2: ClassResponse
    day: str
    days: List[str]
    description: str


class TimetableResponse(BaseModel):
    classes: List[ClassResponse]
    lastUpdated: Optional[str] = None
    conflictingIds: List[str]


class ArrangeResponse(BaseModel):
    success: bool
    message: str
    arranged: List[ClassResponse]
    unplaceable: List[ClassResponse]


def _class_response(class_item: ClassItem) -> ClassResponse:
    return ClassResponse(**class_item.to_dict())


def _conflict_response(conflict: TimeConflict, days: List[Day]) -> ConflictResponse:
    c1, c2 = conflict.class1, conflict.class2
    day_names = [day.value for day in days]
    return ConflictResponse(
        class1=_class_response(c1),
        class2=_class_response(c2),
        day=day_names[0],
        days=day_names,
        description=(
            f"{c1.name} ({format_time(c1.start_time)}-{format_time(c1.end_time)}) and "
            f"{c2.name} ({format_time(c2.start_time)}-{format_time(c2.end_time)}) on {', '.join(day_names)}"
        )
    )


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


@router.get("/classes", response_model=TimetableResponse)
async def get_classes(service: TimetableService = Depends(get_service)):
    timetable = service.get_timetable()
    conflicts = service.find_conflicts()
    return TimetableResponse(
        classes=[_class_response(c) for c in timetable.classes],
        lastUpdated=timetable.last_updated,
        conflictingIds=sorted(conflicting_class_ids(conflicts))
    )


@router.post("/classes", response_model=ClassResponse, status_code=201)
async def add_class(request: ClassCreateRequest, service: TimetableService = Depends(get_service)):
    class_item = service.add_class(
        name=request.name,
        days=request.days,
        start_time=request.startTime,
        end_time=request.endTime,
        location=request.location
    )
    return _class_response(class_item)


@router.delete("/classes/{class_id}", response_model=ClassResponse)
async def remove_class(class_id: str, service: TimetableService = Depends(get_service)):
    try:
        return _class_response(service.remove_class(class_id))
    except ClassNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/classes")
async def clear_classes(service: TimetableService = Depends(get_service)):
    timetable = service.clear()
    return {"message": "All classes have been removed from your timetable.",
            "lastUpdated": timetable.last_updated}


@router.get("/conflicts", response_model=List[ConflictResponse])
async def get_conflicts(service: TimetableService = Depends(get_service)):
    """List clashing pairs, one entry per pair of classes with every day they clash on."""
    grouped = group_conflict_days(service.find_conflicts())
    return [_conflict_response(conflict, days) for conflict, days in grouped]


@router.get("/validate")
async def validate_timetable(service: TimetableService = Depends(get_service)):
    result = service.validate()
    return {
        "is_valid": result.is_valid,
        "conflicting_pairs": len(result.violations),
        "violations": [
            {
                "class1": v.class1.id,
                "class2": v.class2.id,
                "days": [day.value for day in v.days],
                "description": v.description
            }
            for v in result.violations
        ]
    }


@router.post("/arrange", response_model=ArrangeResponse)
async def arrange_timetable(service: TimetableService = Depends(get_service)):
    """
    Auto-arrange the timetable so no classes overlap.

    Classes that cannot be placed are removed and listed as unplaceable.
    """
    try:
        result = service.auto_arrange()
    except EmptyTimetableError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if result.conflicts:
        message = f"{len(result.conflicts)} class(es) couldn't fit without conflicts and were removed"
    else:
        message = "All classes have been arranged without conflicts"

    return ArrangeResponse(
        success=not result.conflicts,
        message=message,
        arranged=[_class_response(c) for c in result.arranged],
        unplaceable=[_class_response(c) for c in result.conflicts]
    )


@router.post("/arrange/async")
async def arrange_timetable_async():
    """
    Start a background auto-arrange run.

    Returns:
        dict: Task ID for polling status
    """
    try:
        task = arrange_timetable_task.delay()
        return {
            "task_id": task.id,
            "status": "PENDING",
            "message": "Auto-arrange started"
        }
    except Exception as e:
        logger.exception("Failed to start auto-arrange task")
        raise HTTPException(status_code=500, detail=f"Failed to start task: {str(e)}")


@router.get("/arrange/status/{task_id}")
async def get_arrange_status(task_id: str):
    """
    Get status of a background auto-arrange run.

    Args:
        task_id: Celery task ID
    """
    try:
        task_result = AsyncResult(task_id, app=celery_app)

        if task_result.state == "SUCCESS":
            return {"task_id": task_id, "status": "SUCCESS", "result": task_result.result}
        if task_result.state == "FAILURE":
            return {"task_id": task_id, "status": "FAILURE", "message": str(task_result.info)}
        return {
            "task_id": task_id,
            "status": task_result.state,
            "message": f"Task state: {task_result.state}"
        }
    except Exception as e:
        logger.exception("Failed to read auto-arrange task status")
        raise HTTPException(status_code=500, detail=f"Failed to get task status: {str(e)}")


@router.get("/grid")
async def get_grid(service: TimetableService = Depends(get_service)):
    """Weekly grid: hourly rows plus each day's classes with their positions."""
    classes = service.list_classes()
    conflict_ids = conflicting_class_ids(service.find_conflicts())

    days: Dict[str, list] = {}
    for day in Day:
        entries = []
        for class_item in sort_by_time(get_classes_for_day(classes, day)):
            top, height = get_class_grid_position(class_item)
            entries.append({
                **class_item.to_dict(),
                "top": top,
                "height": height,
                "timeLabel": f"{format_time(class_item.start_time)} - {format_time(class_item.end_time)}",
                "hasConflict": class_item.id in conflict_ids
            })
        days[day.value] = entries

    return {
        "slots": [{"hour": s.hour, "minute": s.minute, "label": s.label} for s in generate_time_slots()],
        "days": days
    }
