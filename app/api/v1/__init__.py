"""API v1 router aggregation."""

from fastapi import APIRouter

from app.api.v1.endpoints import health, history, stats, templates, workouts

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(workouts.router, prefix="/workouts", tags=["workouts"])
api_router.include_router(templates.router, prefix="/templates", tags=["templates"])
api_router.include_router(history.router, prefix="/history", tags=["history"])
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
