"""
Start a Celery worker that runs queued timetable auto-arrange jobs.
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.celery_app import celery_app
from app.core.config import REDIS_URL, LOG_LEVEL

if __name__ == "__main__":
    print(f"Arrange worker listening on {REDIS_URL}")

    # Arrangements rewrite one shared file, so run them one at a time
    celery_app.worker_main([
        "worker",
        f"--loglevel={LOG_LEVEL.lower()}",
        "--concurrency=1",
        "--pool=solo" if os.name == "nt" else "--pool=prefork"
    ])
