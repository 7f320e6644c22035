"""Cache inspection and invalidation endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

if TYPE_CHECKING:
    from weather_relay.containers import AppContainer

router = APIRouter(prefix="/cache", tags=["cache"])


@router.get("/stats")
async def cache_stats(request: Request) -> dict[str, object]:
    """Return cache counters and configuration."""
    container: AppContainer = request.app.state.container
    cache = container.weather_cache
    return {
        "capacity": cache.capacity,
        "ttl_seconds": cache.ttl_seconds,
        **asdict(cache.stats()),
    }


@router.delete("/{city}")
async def invalidate_city(city: str, request: Request) -> dict[str, str]:
    """Drop the cached entry for one city."""
    container: AppContainer = request.app.state.container
    if not await container.weather_cache.invalidate(city):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"status": "ok"}


@router.delete("")
async def invalidate_all(request: Request) -> dict[str, str]:
    """Drop every cached entry."""
    container: AppContainer = request.app.state.container
    await container.weather_cache.invalidate_all()
    return {"status": "ok"}
