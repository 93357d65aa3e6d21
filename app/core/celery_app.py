"""
Celery configuration for background auto-arrange runs.
"""

from celery import Celery

from app.core.config import REDIS_URL

# Create Celery app
celery_app = Celery(
    "timetable_builder",
    broker=REDIS_URL,
    backend=REDIS_URL,
    include=["app.tasks.arrange_tasks"]
)

# Celery configuration
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=60,
    task_soft_time_limit=50,
    worker_prefetch_multiplier=1,
    # One worker process: arrange runs read and write the same JSON file
    worker_concurrency=1,
)
