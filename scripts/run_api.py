"""
Serve the timetable HTTP API with uvicorn.

Host, port and auto-reload come from API_HOST, API_PORT and API_RELOAD.
"""

import os
import sys

import uvicorn

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.config import API_HOST, API_PORT, API_RELOAD, LOG_LEVEL


if __name__ == "__main__":
    print(f"Timetable API on http://{API_HOST}:{API_PORT} (docs at /docs)")
    if API_RELOAD:
        print("Auto-reload enabled")

    uvicorn.run(
        "app.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_RELOAD,
        log_level=LOG_LEVEL.lower()
    )
