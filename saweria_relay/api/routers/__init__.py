"""Aggregate API routers."""

from fastapi import APIRouter

from .roblox import router as roblox_router
from .saweria import router as saweria_router
from .system import router as system_router

ALL_ROUTERS: tuple[APIRouter, ...] = (
    system_router,
    saweria_router,
    roblox_router,
)

__all__ = ["ALL_ROUTERS"]
