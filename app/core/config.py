"""
Configuration constants for the Timetable Builder.
All configurable settings are defined here.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Persistence Configuration
# The whole timetable lives in one JSON blob stored under a single key
STORAGE_FILE = os.getenv(
    "TIMETABLE_STORAGE_FILE",
    os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "data", "timetable.json")
)
STORAGE_KEY = os.getenv("TIMETABLE_STORAGE_KEY", "timetable_data")

# Background tasks
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")

# API Configuration
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

# Server
API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8000"))
API_RELOAD = os.getenv("API_RELOAD", "false").lower() in ("1", "true", "yes")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Weekly grid rows
GRID_START_HOUR = 6    # 6:00 AM
GRID_END_HOUR = 22     # 10:00 PM
DEFAULT_SLOT_HEIGHT = 60

# Auto-arrange placement window (minutes since midnight)
ARRANGE_WINDOW_START = GRID_START_HOUR * 60
ARRANGE_WINDOW_END = GRID_END_HOUR * 60
ARRANGE_STEP_MINUTES = 30

# Class colors for visual distinction
CLASS_COLORS = [
    "hsl(217, 91%, 60%)",   # Blue (primary)
    "hsl(142, 76%, 36%)",   # Green
    "hsl(280, 65%, 55%)",   # Purple
    "hsl(43, 96%, 56%)",    # Yellow/Orange
    "hsl(340, 82%, 52%)",   # Pink/Red
    "hsl(190, 90%, 40%)",   # Cyan
    "hsl(25, 95%, 53%)",    # Orange
    "hsl(260, 60%, 50%)"    # Indigo
]
