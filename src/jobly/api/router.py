"""Master API router mounted at /api/v1."""

from fastapi import APIRouter

from jobly.api.routes import auth, companies, health, jobs

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(auth.router)
api_router.include_router(companies.router)
api_router.include_router(jobs.router)
