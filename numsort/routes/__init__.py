"""APIRouter registration for the number service."""

from __future__ import annotations

from fastapi import APIRouter

from numsort.routes.health import router as health_router
from numsort.routes.numbers import router as numbers_router

api_router = APIRouter()
api_router.include_router(numbers_router, tags=["Numbers"])

__all__ = ["api_router", "health_router"]
