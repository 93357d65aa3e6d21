"""
Main FastAPI application for the Timetable Builder.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import routes
from app.core.config import CORS_ORIGINS
from app.core.logging_config import setup_logging

setup_logging()

app = FastAPI(
    title="Timetable Builder API",
    description="API for building a weekly class timetable, detecting clashes and auto-arranging classes",
    version="1.0.0"
)

# Enable CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(routes.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Timetable Builder API",
        "version": "1.0.0",
        "endpoints": {
            "classes": "/api/classes",
            "conflicts": "/api/conflicts",
            "arrange": "/api/arrange",
            "grid": "/api/grid",
            "health": "/api/health"
        }
    }
