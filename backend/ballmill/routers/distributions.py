"""
Ball size distribution router.

Endpoints:
- GET /api/distributions: all templates
- GET /api/distributions/select: template the engine would pick
- GET /api/distributions/{key}: one template
"""

from typing import List, Optional

from ballmill.catalog import get_distribution, get_material, list_distributions
from ballmill.core.engine import select_distribution
from ballmill.core.exceptions import ResourceNotFound, raise_not_found
from ballmill.schemas.catalog import DistributionTemplate
from fastapi import APIRouter, Query
from pydantic import BaseModel

router = APIRouter(prefix="/distributions", tags=["distributions"])


class DistributionListResponse(BaseModel):
    items: List[DistributionTemplate]
    total: int


class DistributionSelection(BaseModel):
    key: str
    distribution: DistributionTemplate


@router.get("", response_model=DistributionListResponse)
def list_all() -> DistributionListResponse:
    items = list_distributions()
    return DistributionListResponse(items=items, total=len(items))


# Declared before /{key} so "select" is not taken as a key
@router.get("/select", response_model=DistributionSelection)
def select(
    p80: float = Query(..., gt=0, description="Product P80, μm"),
    wi: float = Query(..., gt=0, description="Bond work index, kWh/t"),
    material_key: Optional[str] = Query(None),
) -> DistributionSelection:
    material = None
    if material_key:
        try:
            material = get_material(material_key)
        except ResourceNotFound:
            raise_not_found("Material", material_key)
    key, template = select_distribution(p80, wi, material)
    return DistributionSelection(key=key, distribution=template)


@router.get("/{key}", response_model=DistributionTemplate)
def get_one(key: str) -> DistributionTemplate:
    try:
        return get_distribution(key)
    except ResourceNotFound:
        raise_not_found("Distribution", key)
