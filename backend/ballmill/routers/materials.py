"""
Material database router (read-only).

Endpoints:
- GET /api/materials: all catalog materials
- GET /api/materials/{key}: one material
"""

from typing import List

from ballmill.catalog import get_material, list_materials
from ballmill.core.exceptions import ResourceNotFound, raise_not_found
from ballmill.schemas.catalog import Material
from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter(prefix="/materials", tags=["materials"])


class MaterialListResponse(BaseModel):
    items: List[Material]
    total: int


@router.get("", response_model=MaterialListResponse)
def list_all() -> MaterialListResponse:
    items = list_materials()
    return MaterialListResponse(items=items, total=len(items))


@router.get("/{key}", response_model=Material)
def get_one(key: str) -> Material:
    try:
        return get_material(key)
    except ResourceNotFound:
        raise_not_found("Material", key)
