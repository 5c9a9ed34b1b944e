"""Health check endpoints."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

router = APIRouter()


@router.get("/health")
async def health_check():
    """Return service health status."""
    return {"status": "healthy", "service": "jobly-api", "version": "1.0.0"}


@router.get("/health/ready")
async def readiness(request: Request):
    """Readiness check; verifies DB connectivity."""
    try:
        session_factory = request.app.state.db_session_factory
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
    except Exception as exc:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "checks": {"database": f"error: {exc}"}},
        )
    return {"status": "ready", "checks": {"database": "ok"}}
