"""API service for the leaderboard dashboard.

Provides REST API endpoints for:
- The full leaderboard snapshot (``/data``)
- Single student lookup by roll number (``/student/{roll}``)
- Health and scheduler status
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.config import CORS_ORIGINS
from data_pipeline.aggregator import AggregatorConfig
from data_pipeline.scheduler import get_scheduler, start_scheduler, stop_scheduler
from data_pipeline.storage.snapshot import read_snapshot, find_student
from utils.errors import SnapshotReadError
from utils.logging import get_logger

logger = get_logger(__name__)

READ_ERROR_MESSAGE = "Error reading data file."
NOT_FOUND_MESSAGE = "Student not found."


class HealthResponse(BaseModel):
    """Response model for health check."""
    status: str
    timestamp: str
    snapshot_available: bool
    students: int
    scheduler_running: bool
    last_refresh: Optional[Dict[str, Any]]


def create_app(
    config: Optional[AggregatorConfig] = None,
    run_scheduler: bool = False,
) -> FastAPI:
    """Build the API app.

    Args:
        config: Aggregator configuration; its ``snapshot_path`` is served
        run_scheduler: Start the hourly refresh scheduler with the app
    """
    config = config or AggregatorConfig()
    snapshot_path = Path(config.snapshot_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifespan."""
        logger.info("Starting leaderboard API...")
        if run_scheduler:
            start_scheduler(config)
        yield
        if run_scheduler:
            stop_scheduler()
        logger.info("Shutting down leaderboard API...")

    app = FastAPI(
        title="LeetCode Leaderboard API",
        description="Serves the latest aggregated LeetCode statistics snapshot",
        version="1.0.0",
        lifespan=lifespan
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(CORS_ORIGINS),
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    def _load() -> List[Dict[str, Any]]:
        try:
            return read_snapshot(snapshot_path)
        except SnapshotReadError as e:
            logger.error(f"Error reading data file: {e}")
            raise HTTPException(status_code=500, detail=READ_ERROR_MESSAGE)

    @app.get("/", response_model=Dict[str, str])
    async def root():
        """Root endpoint."""
        return {
            "message": "LeetCode Leaderboard API",
            "version": "1.0.0",
            "status": "operational"
        }

    @app.get("/data")
    async def get_all():
        """Full snapshot, sorted by total solved."""
        return _load()

    @app.get("/student/{roll}")
    async def get_student(roll: str):
        """Snapshot record for one roll number."""
        student = find_student(_load(), roll)
        if student is None:
            raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)
        return student

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint."""
        try:
            students = len(read_snapshot(snapshot_path))
            snapshot_available = True
        except SnapshotReadError:
            students = 0
            snapshot_available = False

        scheduler_running = False
        last_refresh = None
        if run_scheduler:
            scheduler = get_scheduler(config)
            scheduler_running = scheduler.running
            status = scheduler.get_status()
            last_refresh = status["last_refresh"]

        return HealthResponse(
            status="healthy" if snapshot_available else "degraded",
            timestamp=datetime.now(timezone.utc).isoformat(),
            snapshot_available=snapshot_available,
            students=students,
            scheduler_running=scheduler_running,
            last_refresh=last_refresh,
        )

    @app.get("/scheduler/status")
    async def get_scheduler_status():
        """Get scheduler status and job information."""
        if not run_scheduler:
            raise HTTPException(status_code=404, detail="Scheduler is not enabled.")
        return get_scheduler(config).get_status()

    return app
