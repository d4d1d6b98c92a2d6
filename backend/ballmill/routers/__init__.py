from fastapi import APIRouter

from . import calc, design
from .distributions import router as distributions_router
from .materials import router as materials_router

# Catalog routers, mounted under /api
api_router = APIRouter()
api_router.include_router(materials_router)
api_router.include_router(distributions_router)

__all__ = [
    "api_router",
    "calc",
    "design",
    "distributions_router",
    "materials_router",
]
