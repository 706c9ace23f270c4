"""API router configuration."""

from fastapi import APIRouter

from src.modules.videos.interfaces.router import router as videos_router

api_router = APIRouter()

# Video aggregation
api_router.include_router(videos_router)
